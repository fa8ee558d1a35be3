"""
End-to-end demonstration of a curves batch.

Builds a few synthetic images, shapes an S-curve with a warm grade, runs the
batch with progress output, and writes the processed images to a zip
archive next to this script.

Run:
    python examples/batch_curves_demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import io
import logging
from PIL import Image

from BB_Libs.BatchLib import (
    BatchRunner,
    BatchSession,
    collect_archive_entries,
    default_archive_name,
    format_bytes,
    write_zip_archive,
)
from BB_Libs.CurvesLib import CurveModel
from BB_Libs.ImageEditingLib import ColorGrade


def make_gradient(width, height, tint):
    """Create a horizontal gradient image encoded as PNG bytes."""
    img = Image.new("RGB", (width, height))
    pixels = img.load()
    for x in range(width):
        level = int(x * 255 / max(1, width - 1))
        for y in range(height):
            pixels[x, y] = (level, (level + tint) % 256, 255 - level)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def print_progress(item):
    print(f"  {item.name:<16} {item.status.value}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    curve = CurveModel()
    curve.add_point(64, 40)
    curve.add_point(192, 215)
    grade = ColorGrade(temperature=25, tint=-10)

    session = BatchSession()
    session.add_sources([
        ("gradient_a.png", make_gradient(320, 200, 0)),
        ("gradient_b.png", make_gradient(640, 360, 60)),
        ("broken.png", b"not an image"),
    ])

    runner = BatchRunner()
    runner.add_observer(print_progress)

    print("Running batch...")
    summary = runner.run(session.items, curve.lut, grade, quality=0.9)
    print(f"\nDone: {summary.done}  Failed: {summary.failed}")

    for item in session.items:
        if item.is_done:
            print(f"  {item.name}: {format_bytes(item.input_size)} -> {format_bytes(item.output_size)}")
        else:
            print(f"  {item.name}: {item.error_message}")

    entries = collect_archive_entries(session.items)
    archive_path = Path(__file__).parent / default_archive_name()
    write_zip_archive(entries, archive_path, overwrite=True)
    print(f"\nArchive written to {archive_path}")


if __name__ == "__main__":
    main()
