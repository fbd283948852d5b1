"""
RealSense .bag to still image conversion.

Drives the whole conversion of one recording:

    Initializing -> Running -> Draining -> Terminated

Each iteration pulls one synchronized bundle, decodes every stream present
in it, optionally shows it, and writes it to disk. The run ends when the
playback position goes backwards (the recording wrapped to its start),
when the source reports end of stream, or when the user quits from the
preview. Any error aborts the run; the source is stopped regardless.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from domain.conversion_options import ConversionOptions
from domain.frames import DecodedFrame
from domain.stream_descriptor import StreamDescriptor
from domain.stream_kind import StreamKind
from utils.bundle_extractor import extract_frames
from utils.capture_source import CaptureSource
from utils.depth_scaling import scale_depth_for_display
from utils.format_decoder import decode_frame
from utils.image_writer import ImageWriter
from utils.preview import NullPreview, OpenCVPreview, PreviewSink

logger = logging.getLogger(__name__)

POSITION_BITS = 64


class SessionState(Enum):
    INITIALIZING = "initializing"
    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


class EndReason(Enum):
    END_OF_RECORDING = "end_of_recording"
    USER_QUIT = "user_quit"
    END_OF_STREAM = "end_of_stream"


def position_delta(previous: int, current: int) -> int:
    """
    Signed difference between two unsigned 64-bit playback positions.

    Negative when playback went backwards, i.e. wrapped to the start.
    """
    modulus = 1 << POSITION_BITS
    half = 1 << (POSITION_BITS - 1)
    return ((current - previous + half) % modulus) - half


def is_end_of_recording(previous: int, current: int) -> bool:
    return position_delta(previous, current) < 0


@dataclass
class ConversionSummary:
    """Statistics of one conversion run."""
    streams: List[StreamDescriptor] = field(default_factory=list)
    bundles: int = 0
    frames_written: Dict[str, int] = field(default_factory=dict)
    end_reason: Optional[EndReason] = None
    first_position: int = 0
    last_position: int = 0

    @property
    def total_frames(self) -> int:
        return sum(self.frames_written.values())


class BagConverter:
    """
    Converts every frame of a recording to image files.

    The capture source, preview and writer are injectable; by default the
    RealSense playback, an OpenCV preview (when ``display`` is set) and an
    ImageWriter rooted at ``options.output_root`` are used.
    """

    def __init__(
        self,
        options: ConversionOptions,
        source: Optional[CaptureSource] = None,
        preview: Optional[PreviewSink] = None,
        writer: Optional[ImageWriter] = None,
    ):
        self.options = options

        if source is None:
            from utils.realsense_playback import RealSensePlayback
            source = RealSensePlayback()
        self.source = source

        if preview is None:
            preview = OpenCVPreview() if options.display else NullPreview()
        self.preview = preview

        self.writer = writer or ImageWriter(
            options.output_root,
            quality=options.quality,
            scaling=options.scaling,
        )

        self.state = SessionState.INITIALIZING
        self.summary = ConversionSummary()
        self._last_position = 0

    def run(self) -> ConversionSummary:
        """
        Convert the whole recording.

        Returns:
            ConversionSummary of the run

        Raises:
            FileNotFoundError, NotARecordingError: If the recording cannot be opened
            OSError: If output directories or files cannot be written
            UnsupportedFormatError: If a frame has a format that cannot be decoded
        """
        try:
            self._initialize()
            self.state = SessionState.RUNNING
            self.summary.end_reason = self._loop()
        finally:
            self._finalize()

        self._log_summary()
        return self.summary

    # ============================================================================
    # LIFECYCLE
    # ============================================================================

    def _initialize(self):
        self.state = SessionState.INITIALIZING

        self.source.open(self.options.bag_file)
        streams = self.source.discover_streams()
        streams = self.source.start(streams)
        self.summary.streams = list(streams)

        self.writer.prepare_directories(streams)

        self._last_position = self.source.current_position()
        self.summary.first_position = self._last_position
        logger.debug(f"Initial playback position: {self._last_position}")

    def _loop(self) -> EndReason:
        while True:
            bundle = self.source.next_bundle()
            if bundle is None:
                return EndReason.END_OF_STREAM

            decoded = [decode_frame(raw) for raw in extract_frames(bundle).present()]

            if self.options.display:
                for frame in decoded:
                    self._show(frame)

            for frame in decoded:
                self.writer.write(frame)

            self.summary.bundles += 1

            if self.preview.poll_quit():
                logger.info("Conversion stopped by user")
                return EndReason.USER_QUIT

            current_position = self.source.current_position()
            self.summary.last_position = current_position
            if is_end_of_recording(self._last_position, current_position):
                logger.debug(f"Playback wrapped: {self._last_position} -> {current_position}")
                return EndReason.END_OF_RECORDING
            self._last_position = current_position

    def _show(self, frame: DecodedFrame):
        image = frame.image
        if frame.descriptor.kind is StreamKind.DEPTH:
            image = scale_depth_for_display(image)
        self.preview.show(frame.descriptor.name, image)

    def _finalize(self):
        self.state = SessionState.DRAINING
        try:
            self.preview.close()
        finally:
            self.source.stop()
            self.state = SessionState.TERMINATED

    def _log_summary(self):
        self.summary.frames_written = dict(self.writer.frames_written)

        logger.info("Conversion Summary:")
        logger.info(f"  Bundles processed: {self.summary.bundles}")
        for name, count in sorted(self.summary.frames_written.items()):
            logger.info(f"  {name}: {count} frames")
        if self.summary.end_reason is not None:
            logger.info(f"  Ended by: {self.summary.end_reason.value}")
