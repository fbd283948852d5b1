"""Frame data models: raw SDK frames, bundles and decoded images."""
from dataclasses import dataclass, field
from typing import Any, List

import numpy as np

from domain.stream_descriptor import StreamDescriptor


@dataclass
class RawFrame:
    """
    One undecoded frame as delivered by the capture source.

    ``data`` is any object exposing the buffer protocol. It is only valid
    while the owning bundle is alive, so decoders must copy it.
    """
    descriptor: StreamDescriptor
    frame_number: int
    width: int
    height: int
    data: Any


@dataclass
class FrameBundle:
    """
    A temporally synchronized set of frames at one playback position.

    Any stream may be missing from a given bundle.
    """
    position: int
    frames: List[RawFrame] = field(default_factory=list)


@dataclass
class DecodedFrame:
    """
    A frame converted to its canonical in-memory image.

    ``image`` is BGR8, BGRA8, Gray8 or single-channel uint16 (depth).
    """
    descriptor: StreamDescriptor
    frame_number: int
    image: np.ndarray

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])
