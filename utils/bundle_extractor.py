"""Split a synchronized frame bundle into per-stream slots."""
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from config import INFRARED_SLOTS
from domain.frames import FrameBundle, RawFrame
from domain.stream_kind import StreamKind

logger = logging.getLogger(__name__)


def infrared_slot(stream_index: int) -> int:
    """
    Slot for an infrared stream index.

    Index 0 and index 1 both use slot 0; index N > 0 uses slot N - 1.
    """
    return stream_index - 1 if stream_index != 0 else 0


@dataclass
class ExtractedFrames:
    """
    Frames of one bundle, one slot per tracked stream.

    Empty slots (``None``) mean the stream is absent from this bundle.
    """
    color: Optional[RawFrame] = None
    depth: Optional[RawFrame] = None
    infrared: List[Optional[RawFrame]] = field(default_factory=lambda: [None] * INFRARED_SLOTS)

    def present(self) -> Iterator[RawFrame]:
        """Iterate populated slots in color, depth, infrared order."""
        for frame in (self.color, self.depth, *self.infrared):
            if frame is not None:
                yield frame


def extract_frames(bundle: FrameBundle) -> ExtractedFrames:
    """
    Assign each frame of a bundle to its slot.

    Args:
        bundle: Synchronized frames from the capture source

    Returns:
        ExtractedFrames with absent streams left empty
    """
    extracted = ExtractedFrames()

    for frame in bundle.frames:
        kind = frame.descriptor.kind

        if kind is StreamKind.COLOR:
            extracted.color = frame
        elif kind is StreamKind.DEPTH:
            extracted.depth = frame
        elif kind is StreamKind.INFRARED:
            slot = infrared_slot(frame.descriptor.index)
            if not 0 <= slot < INFRARED_SLOTS:
                logger.warning(
                    f"Skipping infrared stream index {frame.descriptor.index}: "
                    f"only {INFRARED_SLOTS} infrared slots are tracked"
                )
                continue
            extracted.infrared[slot] = frame

    return extracted
