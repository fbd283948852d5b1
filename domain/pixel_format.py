"""Pixel format enumeration mirroring the RealSense SDK formats."""
from enum import Enum


class PixelFormat(Enum):
    """
    Pixel formats a RealSense recording may report for a stream.

    Values are the SDK format names, so ``PixelFormat.from_name("rgb8")``
    maps ``rs.format.rgb8`` without importing pyrealsense2 here.
    """
    ANY = "any"
    Z16 = "z16"
    DISPARITY16 = "disparity16"
    XYZ32F = "xyz32f"
    YUYV = "yuyv"
    RGB8 = "rgb8"
    BGR8 = "bgr8"
    RGBA8 = "rgba8"
    BGRA8 = "bgra8"
    Y8 = "y8"
    Y16 = "y16"
    RAW10 = "raw10"
    RAW16 = "raw16"
    RAW8 = "raw8"
    UYVY = "uyvy"
    MOTION_RAW = "motion_raw"
    MOTION_XYZ32F = "motion_xyz32f"
    GPIO_RAW = "gpio_raw"
    SIX_DOF = "six_dof"
    DISPARITY32 = "disparity32"
    Y10BPACK = "y10bpack"
    DISTANCE = "distance"
    MJPEG = "mjpeg"
    Y8I = "y8i"
    Y12I = "y12i"
    INZI = "inzi"
    INVI = "invi"
    W10 = "w10"
    Z16H = "z16h"
    FG = "fg"
    Y411 = "y411"
    Y16I = "y16i"
    M420 = "m420"
    COMBINED_MOTION = "combined_motion"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value.upper()

    @classmethod
    def from_name(cls, name: str) -> "PixelFormat":
        """
        Look up a format by SDK name (case-insensitive).

        Names the SDK adds in later releases map to ``UNKNOWN`` so that
        discovery never fails; decoding such a frame fails instead.
        """
        key = name.strip().lower()
        if key.startswith("format."):
            key = key[len("format."):]
        if key == "6dof":
            key = cls.SIX_DOF.value
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN
