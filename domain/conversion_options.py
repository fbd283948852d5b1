"""Conversion options data model."""
from dataclasses import dataclass
from pathlib import Path

from config import (
    BAG_EXTENSION,
    JPEG_QUALITY,
    JPEG_QUALITY_MIN,
    JPEG_QUALITY_MAX,
)


def clamp_quality(quality: int) -> int:
    """Clamp a JPEG quality value into the encoder's accepted range."""
    return min(max(JPEG_QUALITY_MIN, int(quality)), JPEG_QUALITY_MAX)


@dataclass
class ConversionOptions:
    """
    Options for converting one recording.

    Attributes:
        bag_file: Path to the input ``.bag`` recording
        scaling: Write depth as 8-bit visualization instead of raw 16-bit
        quality: JPEG quality for color and infrared, clamped to [0, 100]
        display: Show preview windows while converting
    """
    bag_file: Path
    scaling: bool = False
    quality: int = JPEG_QUALITY
    display: bool = False

    def __post_init__(self):
        self.bag_file = Path(self.bag_file)
        self.quality = clamp_quality(self.quality)

    @property
    def output_root(self) -> Path:
        """Root directory for all streams: ``<bag parent>/<bag stem>``."""
        return self.bag_file.parent / self.bag_file.stem

    def validate(self) -> None:
        """
        Check the input file before anything is opened.

        Raises:
            FileNotFoundError: If the bag file does not exist or is not a
                regular file, or does not carry the recording extension
        """
        if not self.bag_file.is_file() or self.bag_file.suffix != BAG_EXTENSION:
            raise FileNotFoundError(f"failed can't find input bag file: {self.bag_file}")
