"""
Output path rules for converted frames.

    <bag parent>/<bag stem>/<stream name>/<frame number:06d>.<ext>

Stream names come from ``StreamKind.stream_name``. Paths depend only on
their inputs, so converting the same recording again overwrites the same
files.
"""
from pathlib import Path
from typing import Union

from config import FRAME_NUMBER_DIGITS
from domain.stream_kind import StreamKind


def frame_filename(kind: StreamKind, frame_number: int) -> str:
    """Zero-padded frame number plus the extension for the stream kind."""
    return f"{frame_number:0{FRAME_NUMBER_DIGITS}d}{kind.extension}"


def output_path(root: Union[str, Path], kind: StreamKind, index: int, frame_number: int) -> Path:
    """Full path of one frame file."""
    return Path(root) / kind.stream_name(index) / frame_filename(kind, frame_number)
