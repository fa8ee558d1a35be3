"""
BB_Libs - BatchBox Curves Library Modules

This package contains core functionality for the BatchBox curves tool,
organized into specialized sub-packages:

- CurvesLib: Control point editing and lookup table generation
- ImageEditingLib: Color grading and the per-pixel transform engine
- BatchLib: Batch items, intake, sequential batch runner and archive export
- ProjStoreLib: Persistence of curve and grade settings
"""

__version__ = "0.1.0"
