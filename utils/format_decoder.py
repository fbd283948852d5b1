"""
Pixel format decoding for recorded frames (CPU-only).

Converts a RawFrame into the canonical OpenCV image used by preview and
file output:

| Stream         | Format                  | Result                        |
|----------------|-------------------------|-------------------------------|
| Color/Infrared | RGB8                    | BGR8 (RGB -> BGR)             |
| Color/Infrared | RGBA8                   | BGRA8 (RGBA -> BGRA)          |
| Color/Infrared | BGR8 / BGRA8            | unchanged                     |
| Color          | Y16                     | Gray8, scaled by 255/65535    |
| Color          | YUYV                    | BGR8                          |
| Infrared       | Y8                      | Gray8, unchanged              |
| Infrared       | UYVY                    | Gray8 (luma only)             |
| Depth          | any                     | uint16, raw depth units       |

Anything else raises UnsupportedFormatError.
"""
import logging
from typing import Callable, Dict, Tuple

import cv2
import numpy as np

from domain.errors import UnsupportedFormatError
from domain.frames import DecodedFrame, RawFrame
from domain.pixel_format import PixelFormat
from domain.stream_kind import StreamKind

logger = logging.getLogger(__name__)

Y16_TO_8BIT_SCALE = 255.0 / 65535.0

Converter = Callable[[RawFrame], np.ndarray]


def _as_array(raw: RawFrame, dtype, channels: int) -> np.ndarray:
    """
    Copy the frame buffer into an owned array of shape (h, w[, c]).

    Only the leading h * w * c elements are read. Trailing bytes (wider
    source pixels such as 32-bit disparity, row padding) are ignored.

    Raises:
        ValueError: If the buffer is shorter than the frame geometry needs
    """
    buffer = np.frombuffer(raw.data, dtype=np.uint8)
    expected = raw.width * raw.height * channels * np.dtype(dtype).itemsize
    if buffer.size < expected:
        raise ValueError(
            f"{raw.descriptor.name} frame {raw.frame_number}: buffer has {buffer.size} bytes, "
            f"needs {expected} for {raw.width}x{raw.height} {raw.descriptor.pixel_format}"
        )

    shape = (raw.height, raw.width) if channels == 1 else (raw.height, raw.width, channels)
    return buffer[:expected].view(dtype).reshape(shape).copy()


# ============================================================================
# CONVERTERS
# ============================================================================

def _rgb8_to_bgr(raw: RawFrame) -> np.ndarray:
    return cv2.cvtColor(_as_array(raw, np.uint8, 3), cv2.COLOR_RGB2BGR)


def _rgba8_to_bgra(raw: RawFrame) -> np.ndarray:
    return cv2.cvtColor(_as_array(raw, np.uint8, 4), cv2.COLOR_RGBA2BGRA)


def _bgr8(raw: RawFrame) -> np.ndarray:
    return _as_array(raw, np.uint8, 3)


def _bgra8(raw: RawFrame) -> np.ndarray:
    return _as_array(raw, np.uint8, 4)


def _y8(raw: RawFrame) -> np.ndarray:
    return _as_array(raw, np.uint8, 1)


def _y16_to_gray8(raw: RawFrame) -> np.ndarray:
    # convertScaleAbs rounds like cv::Mat::convertTo: 65535 -> 255, 32767 -> 127
    return cv2.convertScaleAbs(_as_array(raw, np.uint16, 1), alpha=Y16_TO_8BIT_SCALE)


def _yuyv_to_bgr(raw: RawFrame) -> np.ndarray:
    return cv2.cvtColor(_as_array(raw, np.uint8, 2), cv2.COLOR_YUV2BGR_YUYV)


def _uyvy_to_gray(raw: RawFrame) -> np.ndarray:
    return cv2.cvtColor(_as_array(raw, np.uint8, 2), cv2.COLOR_YUV2GRAY_UYVY)


def _depth16(raw: RawFrame) -> np.ndarray:
    return _as_array(raw, np.uint16, 1)


# ============================================================================
# DISPATCH TABLE
# ============================================================================

DECODERS: Dict[Tuple[StreamKind, PixelFormat], Converter] = {
    (StreamKind.COLOR, PixelFormat.RGB8): _rgb8_to_bgr,
    (StreamKind.COLOR, PixelFormat.RGBA8): _rgba8_to_bgra,
    (StreamKind.COLOR, PixelFormat.BGR8): _bgr8,
    (StreamKind.COLOR, PixelFormat.BGRA8): _bgra8,
    (StreamKind.COLOR, PixelFormat.Y16): _y16_to_gray8,
    (StreamKind.COLOR, PixelFormat.YUYV): _yuyv_to_bgr,
    (StreamKind.INFRARED, PixelFormat.RGB8): _rgb8_to_bgr,
    (StreamKind.INFRARED, PixelFormat.RGBA8): _rgba8_to_bgra,
    (StreamKind.INFRARED, PixelFormat.BGR8): _bgr8,
    (StreamKind.INFRARED, PixelFormat.BGRA8): _bgra8,
    (StreamKind.INFRARED, PixelFormat.Y8): _y8,
    (StreamKind.INFRARED, PixelFormat.UYVY): _uyvy_to_gray,
}


def get_converter(kind: StreamKind, pixel_format: PixelFormat) -> Converter:
    """
    Find the converter for a stream kind and pixel format.

    Depth accepts any format and is reinterpreted as uint16.

    Raises:
        UnsupportedFormatError: If the pair is not in the decode table
    """
    if kind is StreamKind.DEPTH:
        return _depth16

    converter = DECODERS.get((kind, pixel_format))
    if converter is None:
        raise UnsupportedFormatError(kind, pixel_format)
    return converter


def decode_frame(raw: RawFrame) -> DecodedFrame:
    """
    Decode a raw frame into its canonical image.

    Args:
        raw: Frame from the capture source

    Returns:
        DecodedFrame owning a copy of the pixel data

    Raises:
        UnsupportedFormatError: If the frame format is not in the decode table
        ValueError: If the buffer is too short for the frame geometry
    """
    descriptor = raw.descriptor
    converter = get_converter(descriptor.kind, descriptor.pixel_format)
    decoded = DecodedFrame(descriptor=descriptor, frame_number=raw.frame_number, image=converter(raw))

    logger.debug(
        f"Decoded {descriptor.name} frame {raw.frame_number}: "
        f"{descriptor.pixel_format} -> {decoded.image.dtype} {decoded.width}x{decoded.height}"
    )

    return decoded
