"""Stream kind enumeration for recorded sensor outputs."""
from enum import Enum

from config import LOSSY_EXTENSION, LOSSLESS_EXTENSION


class StreamKind(Enum):
    """
    Category of sensor output found in a recording.

    Each kind has its own pixel formats and output policy: color and
    infrared are written lossy (JPEG), depth is written lossless (PNG).
    """
    COLOR = "color"
    DEPTH = "depth"
    INFRARED = "infrared"

    def __str__(self) -> str:
        """Return human-readable stream kind name."""
        return self.value.title()

    @property
    def directory_name(self) -> str:
        """Base name of the output directory (``Color``, ``Depth``, ``Infrared``)."""
        return str(self)

    def stream_name(self, index: int = 0) -> str:
        """Output directory / preview window name. The index only matters for infrared."""
        if self is StreamKind.INFRARED and index != 0:
            return f"{self.directory_name} {index}"
        return self.directory_name

    @property
    def is_lossless(self) -> bool:
        """Check if frames of this kind are written without compression loss."""
        return self is StreamKind.DEPTH

    @property
    def extension(self) -> str:
        """File extension used for frames of this kind."""
        return LOSSLESS_EXTENSION if self.is_lossless else LOSSY_EXTENSION
