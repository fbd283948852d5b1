"""Depth-to-8-bit rescaling for visualization."""
import numpy as np

from config import DEPTH_DISPLAY_RANGE_MM


def scale_depth_for_display(
    depth_image: np.ndarray,
    depth_range_mm: float = DEPTH_DISPLAY_RANGE_MM
) -> np.ndarray:
    """
    Map raw 16-bit depth to an 8-bit gradient.

    0 mm becomes 255 (white, near) and ``depth_range_mm`` or farther
    becomes 0 (black, far):

        out = clamp(round(255 - d * 255 / depth_range_mm), 0, 255)

    Rounding is half-to-even, matching OpenCV's ``saturate_cast``.

    Args:
        depth_image: Depth image (uint16, millimeters)
        depth_range_mm: Depth mapped to black

    Returns:
        Rescaled image (uint8, same shape)
    """
    scale = 255.0 / float(depth_range_mm)
    scaled = 255.0 - depth_image.astype(np.float64) * scale
    return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)
