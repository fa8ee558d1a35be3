"""
Settings persistence for BatchBox Curves.

Curve points and color grade values are stored as JSON under a fixed
storage key, so one settings file can hold other tools' state next to it.
Loading never fails: missing, unreadable or malformed data falls back to the
identity curve and a neutral grade.

The settings payload:
- schema_version
- points: list of {id, x, y}
- color_grade: {temperature, tint}

Functions:
    serialize_session: Build the settings payload from a curve and grade
    deserialize_session: Rebuild a curve and grade from a payload
    get_settings_path: Default settings file location in a directory
    load_session_settings: Load curve and grade from a settings file
    save_session_settings: Save curve and grade to a settings file
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple

from BB_Libs.CurvesLib.curve_model import CurveModel, deserialize_points
from BB_Libs.ImageEditingLib.color_grade import ColorGrade
from BB_Libs.constants import (
    FIELD_COLOR_GRADE,
    FIELD_POINTS,
    FIELD_SCHEMA_VERSION,
    SCHEMA_VERSION,
    SETTINGS_FILE_NAME,
    STORAGE_KEY,
)

logger = logging.getLogger(__name__)


def serialize_session(curve: CurveModel, grade: ColorGrade) -> Dict[str, Any]:
    return {
        FIELD_SCHEMA_VERSION: SCHEMA_VERSION,
        FIELD_POINTS: curve.serialize(),
        FIELD_COLOR_GRADE: grade.to_dict(),
    }


def _deserialize_grade(data: Any) -> ColorGrade:
    if not isinstance(data, dict):
        return ColorGrade()
    try:
        return ColorGrade.from_dict(data)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring malformed color grade settings")
        return ColorGrade()


def deserialize_session(data: Any) -> Tuple[CurveModel, ColorGrade]:
    """
    Rebuild the curve and grade from a settings payload.

    A bare list is accepted as a point list with a neutral grade.

    Args:
        data: Payload from serialize_session(), or any JSON value

    Returns:
        (curve, grade); each falls back to its default independently
    """
    if isinstance(data, list):
        data = {FIELD_POINTS: data}
    if not isinstance(data, dict):
        return CurveModel(), ColorGrade()

    points = deserialize_points(data.get(FIELD_POINTS))
    if points is None:
        if FIELD_POINTS in data:
            logger.warning("Ignoring malformed curve points, using identity curve")
        curve = CurveModel()
    else:
        curve = CurveModel(points)

    return curve, _deserialize_grade(data.get(FIELD_COLOR_GRADE))


def get_settings_path(base_dir: Path) -> Path:
    return Path(base_dir) / SETTINGS_FILE_NAME


def _read_settings_file(settings_path: Path) -> Dict[str, Any]:
    try:
        payload = json.loads(settings_path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, UnicodeDecodeError, OSError):
        return {}

    if not isinstance(payload, dict):
        return {}
    return payload


def load_session_settings(settings_path: Path) -> Tuple[CurveModel, ColorGrade]:
    """
    Load curve and grade from a settings file.

    Args:
        settings_path: Path to the JSON settings file

    Returns:
        (curve, grade), defaults if the file or key is missing or malformed
    """
    payload = _read_settings_file(Path(settings_path))
    return deserialize_session(payload.get(STORAGE_KEY))


def save_session_settings(settings_path: Path, curve: CurveModel, grade: ColorGrade) -> None:
    """
    Save curve and grade under the storage key, keeping other keys in the file.

    Raises:
        OSError: If the file cannot be written
    """
    settings_path = Path(settings_path)
    payload = _read_settings_file(settings_path)
    payload[STORAGE_KEY] = serialize_session(curve, grade)

    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
