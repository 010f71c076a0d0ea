"""
Beat File I/O

Reads beat lists exported by the beat classifier and writes generated
cuts as JSON.

Accepted beat file shapes:
    [{"time": 1.0, "intensity": 0.8, "type": "strong"}, ...]
    {"beats": [...], "start_time": 0.0, "end_time": 30.0, "plan_count": 6}
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import ValidationError

from .beat_objects import BeatMarker, CutMarker
from .core.models import CutRequest
from .exceptions import BeatFileError
from .logger import logger

PathLike = Union[str, Path]


def parse_cut_request(data) -> CutRequest:
    """
    Validate decoded JSON into a CutRequest.

    Raises:
        BeatFileError: If the payload does not match either accepted shape
    """
    if isinstance(data, list):
        data = {"beats": data}
    if not isinstance(data, dict):
        raise BeatFileError(f"Expected a list or object, got {type(data).__name__}")

    try:
        return CutRequest.model_validate(data)
    except ValidationError as e:
        raise BeatFileError(f"Invalid beat data: {e.error_count()} error(s)\n{e}") from e


def load_cut_request(path: PathLike) -> CutRequest:
    """
    Load a beat file from disk.

    Raises:
        BeatFileError: If the file is missing, not JSON or fails validation
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise BeatFileError(f"Beat file not found: {path}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise BeatFileError(f"Beat file is not valid JSON: {path} ({e.msg} at line {e.lineno})", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise BeatFileError(f"Beat file is not UTF-8 text: {path} (byte {e.start})", path=str(path)) from e
    except OSError as e:
        raise BeatFileError(f"Cannot read beat file: {path} ({e.strerror or e})", path=str(path)) from e

    try:
        request = parse_cut_request(data)
    except BeatFileError as e:
        e.path = str(path)
        raise

    logger.debug(f"Loaded {len(request.beats)} beats from {path}")
    return request


def load_beat_markers(path: PathLike) -> List[BeatMarker]:
    """Beat markers from a beat file, ascending by time."""
    return load_cut_request(path).markers()


def dump_cut_markers(cuts: Sequence[CutMarker], path: Optional[PathLike] = None) -> str:
    """
    Serialize cuts to JSON text, writing it to ``path`` when given.
    """
    text = json.dumps([cut.to_dict() for cut in cuts], indent=2)
    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")
        logger.debug(f"Wrote {len(cuts)} cuts to {path}")
    return text
