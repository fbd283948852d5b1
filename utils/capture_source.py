"""Capture source interface consumed by the bag converter."""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from domain.frames import FrameBundle
from domain.stream_descriptor import StreamDescriptor


class CaptureSource(ABC):
    """
    A recorded session that yields synchronized frame bundles.

    Bundles come in non-decreasing playback position order. The position
    only decreases when playback wraps back to the start of the recording.
    """

    @abstractmethod
    def open(self, path: Path) -> None:
        """
        Open a recording.

        Raises:
            FileNotFoundError: If the file does not exist
            NotARecordingError: If the file cannot be read as a recording
        """

    @abstractmethod
    def discover_streams(self) -> List[StreamDescriptor]:
        """Return the streams found in the opened recording."""

    @abstractmethod
    def start(self, streams: List[StreamDescriptor]) -> List[StreamDescriptor]:
        """Enable the given streams and start non-real-time playback.

        Returns the streams actually enabled.
        """

    @abstractmethod
    def next_bundle(self) -> Optional[FrameBundle]:
        """Block until the next bundle is available. ``None`` means end of stream."""

    @abstractmethod
    def current_position(self) -> int:
        """Current playback position (unsigned, wraps at end of recording)."""

    @abstractmethod
    def stop(self) -> None:
        """Stop playback and release the recording."""
