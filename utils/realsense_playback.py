"""
Intel RealSense .bag playback using pyrealsense2 SDK.

Implements CaptureSource over a recorded file: discovers the color, depth
and infrared streams stored in the recording, plays them back as fast as
possible (non real-time) and converts each SDK frameset into a FrameBundle.

System requirements:
- pyrealsense2 installed (pip install pyrealsense2)
- NO camera required (playback from file)
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from domain.errors import NotARecordingError
from domain.frames import FrameBundle, RawFrame
from domain.pixel_format import PixelFormat
from domain.stream_descriptor import StreamDescriptor
from domain.stream_kind import StreamKind
from utils.capture_source import CaptureSource

logger = logging.getLogger(__name__)


def _import_realsense():
    try:
        import pyrealsense2 as rs
    except ImportError:
        raise ImportError("pyrealsense2 is required for RealSensePlayback")
    return rs


def _stream_kind_map(rs) -> Dict[object, StreamKind]:
    return {
        rs.stream.color: StreamKind.COLOR,
        rs.stream.depth: StreamKind.DEPTH,
        rs.stream.infrared: StreamKind.INFRARED,
    }


def _pixel_format(rs_format) -> PixelFormat:
    """Map an ``rs.format`` value to PixelFormat by its SDK name."""
    name = getattr(rs_format, "name", None) or str(rs_format)
    return PixelFormat.from_name(name)


class RealSensePlayback(CaptureSource):
    """
    Playback of a RealSense ``.bag`` recording.

    Handles:
    - Stream discovery from every sensor stored in the file
    - Pipeline start with all discovered streams enabled
    - Non real-time playback (no dropped frames)
    - Conversion of framesets to FrameBundle / RawFrame
    """

    def __init__(self):
        self.rs = _import_realsense()
        self.stream_kinds = _stream_kind_map(self.rs)

        self.bag_file: Optional[Path] = None
        self.playback = None
        self.pipeline = None
        self.pipeline_profile = None

        # Keeps SDK frame buffers alive until the next bundle is pulled
        self._frameset = None
        self._started = False

    def open(self, path: Path) -> None:
        """
        Load the recording as a playback device.

        Args:
            path: Path to the ``.bag`` file

        Raises:
            FileNotFoundError: If the file does not exist
            NotARecordingError: If the SDK cannot read the file
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"failed can't find input bag file: {path}")

        try:
            context = self.rs.context()
            self.playback = context.load_device(str(path))
        except RuntimeError as e:
            raise NotARecordingError(f"failed can't open recording {path}: {e}") from e

        self.bag_file = path
        logger.debug(f"Opened recording: {path}")

    def discover_streams(self) -> List[StreamDescriptor]:
        """
        Enumerate color, depth and infrared streams stored in the recording.

        Other stream types (motion, pose, fisheye, ...) are skipped.

        Returns:
            Stream descriptors in sensor order, one per (kind, index)
        """
        if self.playback is None:
            raise RuntimeError("recording is not open")

        kinds = self.stream_kinds
        streams: List[StreamDescriptor] = []
        seen = set()

        for sensor in self.playback.query_sensors():
            for profile in sensor.get_stream_profiles():
                stream_type = profile.stream_type()
                kind = kinds.get(stream_type)
                if kind is None:
                    logger.debug(f"Skipping {profile.stream_name()} stream: not an image stream")
                    continue

                key = (kind, profile.stream_index())
                if key in seen:
                    continue
                seen.add(key)

                width = height = 0
                if profile.is_video_stream_profile():
                    video_profile = profile.as_video_stream_profile()
                    width, height = video_profile.width(), video_profile.height()

                descriptor = StreamDescriptor(
                    kind=kind,
                    index=profile.stream_index(),
                    pixel_format=_pixel_format(profile.format()),
                    width=width,
                    height=height,
                )
                streams.append(descriptor)
                logger.debug(f"Discovered stream: {descriptor}")

        if not streams:
            raise NotARecordingError(f"no color, depth or infrared streams in {self.bag_file}")

        return streams

    def start(self, streams: List[StreamDescriptor]) -> List[StreamDescriptor]:
        """
        Start the pipeline from file with the given streams enabled.

        Returns:
            Streams reported by the started pipeline
        """
        stream_types = {kind: stream_type for stream_type, kind in self.stream_kinds.items()}

        config = self.rs.config()
        for descriptor in streams:
            config.enable_stream(stream_types[descriptor.kind], descriptor.index)

        # Repeat playback stays on: the position wrapping back marks the end
        config.enable_device_from_file(str(self.bag_file))

        self.pipeline = self.rs.pipeline()
        self.pipeline_profile = self.pipeline.start(config)
        self._started = True

        device = self.pipeline_profile.get_device()
        device.as_playback().set_real_time(False)

        enabled = []
        by_key = {(d.kind, d.index): d for d in streams}
        for profile in self.pipeline_profile.get_streams():
            logger.info(f"Enabled stream: {profile.stream_name()}")
            kind = self.stream_kinds.get(profile.stream_type())
            descriptor = by_key.get((kind, profile.stream_index()))
            if descriptor is not None:
                enabled.append(descriptor)

        return enabled or list(streams)

    def next_bundle(self) -> Optional[FrameBundle]:
        """Wait for the next synchronized frameset and wrap it."""
        frameset = self.pipeline.wait_for_frames()
        self._frameset = frameset

        kinds = self.stream_kinds
        bundle = FrameBundle(position=self.current_position())

        for frame in frameset:
            profile = frame.get_profile()
            kind = kinds.get(profile.stream_type())
            if kind is None:
                continue

            video_frame = frame.as_video_frame()
            width, height = video_frame.get_width(), video_frame.get_height()

            descriptor = StreamDescriptor(
                kind=kind,
                index=profile.stream_index(),
                pixel_format=_pixel_format(profile.format()),
                width=width,
                height=height,
            )
            bundle.frames.append(RawFrame(
                descriptor=descriptor,
                frame_number=frame.get_frame_number(),
                width=width,
                height=height,
                data=frame.get_data(),
            ))

        return bundle

    def current_position(self) -> int:
        """Playback position in nanoseconds from the start of the recording."""
        return int(self.pipeline_profile.get_device().as_playback().get_position())

    def stop(self) -> None:
        """Stop the pipeline. Safe to call more than once."""
        self._frameset = None
        if self.pipeline is not None and self._started:
            self.pipeline.stop()
            self._started = False
            logger.debug("RealSense pipeline stopped")
