"""
ProjStoreLib - Settings storage and management

This module handles persistence of the curve and color grade
between sessions.
"""

from BB_Libs.ProjStoreLib.settings_store import (
    serialize_session,
    deserialize_session,
    get_settings_path,
    load_session_settings,
    save_session_settings,
)

__all__ = [
    "serialize_session",
    "deserialize_session",
    "get_settings_path",
    "load_session_settings",
    "save_session_settings",
]
