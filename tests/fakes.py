"""Test doubles for the capture source and raw frames."""
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np

from domain.frames import FrameBundle, RawFrame
from domain.pixel_format import PixelFormat
from domain.stream_descriptor import StreamDescriptor
from domain.stream_kind import StreamKind
from utils.capture_source import CaptureSource


def make_raw(kind: StreamKind, pixel_format: PixelFormat, width: int, height: int,
             data, index: int = 0, frame_number: int = 0) -> RawFrame:
    if isinstance(data, np.ndarray):
        data = data.tobytes()
    descriptor = StreamDescriptor(kind=kind, index=index, pixel_format=pixel_format,
                                  width=width, height=height)
    return RawFrame(descriptor=descriptor, frame_number=frame_number,
                    width=width, height=height, data=data)


def color_frame(frame_number: int, value=(10, 20, 30)) -> RawFrame:
    return make_raw(StreamKind.COLOR, PixelFormat.RGB8, 2, 2, bytes(value) * 4,
                    frame_number=frame_number)


def depth_frame(frame_number: int, value: int = 1000) -> RawFrame:
    data = np.full((2, 2), value, dtype=np.uint16)
    return make_raw(StreamKind.DEPTH, PixelFormat.Z16, 2, 2, data, frame_number=frame_number)


def infrared_frame(frame_number: int, index: int = 1, value: int = 77) -> RawFrame:
    return make_raw(StreamKind.INFRARED, PixelFormat.Y8, 2, 2, bytes([value]) * 4,
                    index=index, frame_number=frame_number)


class FakeCaptureSource(CaptureSource):
    """
    Replays prepared bundles and playback positions.

    ``positions`` is consumed one value per ``current_position`` call: the
    first at start-up, then one after every bundle.
    """

    def __init__(self, streams: List[StreamDescriptor], bundles: Iterable[Optional[FrameBundle]],
                 positions: Iterable[int]):
        self.streams = list(streams)
        self.bundles = list(bundles)
        self.positions = list(positions)
        self.opened: Optional[Path] = None
        self.started_with: Optional[List[StreamDescriptor]] = None
        self.bundles_pulled = 0
        self.stopped = False

    def open(self, path: Path) -> None:
        self.opened = Path(path)

    def discover_streams(self) -> List[StreamDescriptor]:
        return list(self.streams)

    def start(self, streams: List[StreamDescriptor]) -> List[StreamDescriptor]:
        self.started_with = list(streams)
        return list(streams)

    def next_bundle(self) -> Optional[FrameBundle]:
        if self.bundles_pulled >= len(self.bundles):
            return None
        bundle = self.bundles[self.bundles_pulled]
        self.bundles_pulled += 1
        return bundle

    def current_position(self) -> int:
        return self.positions.pop(0)

    def stop(self) -> None:
        self.stopped = True
