"""Still image output for decoded frames."""
import logging
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Optional

import cv2
import numpy as np

from config import JPEG_QUALITY
from domain.conversion_options import clamp_quality
from domain.frames import DecodedFrame
from domain.stream_descriptor import StreamDescriptor
from domain.stream_kind import StreamKind
from utils.depth_scaling import scale_depth_for_display
from utils.output_layout import output_path

logger = logging.getLogger(__name__)


class ImageWriter:
    """
    Writes decoded frames as individual image files.

    - Color / infrared: JPEG at the configured quality
    - Depth: PNG, raw 16-bit or 8-bit rescaled when ``scaling`` is set

    Existing files are overwritten.
    """

    def __init__(self, root: Path, quality: int = JPEG_QUALITY, scaling: bool = False):
        """
        Initialize image writer.

        Args:
            root: Root output directory (``<bag parent>/<bag stem>``)
            quality: JPEG quality, clamped to [0, 100]
            scaling: Write depth as 8-bit visualization instead of raw 16-bit
        """
        self.root = Path(root)
        self.quality = clamp_quality(quality)
        self.scaling = scaling
        self.frames_written: Counter = Counter()

    @property
    def jpeg_params(self) -> List[int]:
        return [cv2.IMWRITE_JPEG_QUALITY, self.quality]

    def prepare_directories(self, streams: Iterable[StreamDescriptor]) -> List[Path]:
        """
        Create the root directory and one sub directory per stream.

        Raises:
            OSError: If a directory cannot be created
        """
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info(f"Output directory: {self.root}")

        directories = []
        for stream in streams:
            directory = self.root / stream.name
            directory.mkdir(parents=True, exist_ok=True)
            directories.append(directory)
        return directories

    def path_for(self, frame: DecodedFrame) -> Path:
        descriptor = frame.descriptor
        return output_path(self.root, descriptor.kind, descriptor.index, frame.frame_number)

    # ============================================================================
    # WRITERS
    # ============================================================================

    def write_color(self, frame: DecodedFrame) -> Path:
        """Write a color frame as JPEG."""
        return self._write(frame, frame.image, self.jpeg_params)

    def write_depth(self, frame: DecodedFrame) -> Path:
        """Write a depth frame as PNG (16-bit raw, or 8-bit when scaling)."""
        image = scale_depth_for_display(frame.image) if self.scaling else frame.image
        return self._write(frame, image)

    def write_infrared(self, frame: DecodedFrame) -> Path:
        """Write an infrared frame as JPEG."""
        return self._write(frame, frame.image, self.jpeg_params)

    def write(self, frame: DecodedFrame) -> Path:
        """Write a frame with the policy of its stream kind."""
        kind = frame.descriptor.kind
        if kind is StreamKind.COLOR:
            return self.write_color(frame)
        if kind is StreamKind.DEPTH:
            return self.write_depth(frame)
        return self.write_infrared(frame)

    def _write(self, frame: DecodedFrame, image: np.ndarray, params: Optional[List[int]] = None) -> Path:
        path = self.path_for(frame)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not cv2.imwrite(str(path), image, params or []):
            raise OSError(f"failed to write {path}")

        self.frames_written[frame.descriptor.name] += 1
        return path
