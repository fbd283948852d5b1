"""Stream descriptor data structure."""
from dataclasses import dataclass

from domain.pixel_format import PixelFormat
from domain.stream_kind import StreamKind


@dataclass(frozen=True)
class StreamDescriptor:
    """
    A stream discovered in a recording.

    Attributes:
        kind: Color, Depth or Infrared
        index: SDK stream index (0, 1 or 2 for infrared, 0 otherwise)
        pixel_format: Pixel format reported by the recording
        width: Nominal frame width in pixels
        height: Nominal frame height in pixels
    """
    kind: StreamKind
    index: int
    pixel_format: PixelFormat
    width: int = 0
    height: int = 0

    @property
    def name(self) -> str:
        """Output directory / preview window name (``Infrared 2`` etc.)."""
        return self.kind.stream_name(self.index)

    def __str__(self) -> str:
        return f"{self.name} [{self.pixel_format} {self.width}x{self.height}]"
