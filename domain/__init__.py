"""Domain models for recorded streams, frames and conversion options."""
from domain.stream_kind import StreamKind
from domain.pixel_format import PixelFormat
from domain.stream_descriptor import StreamDescriptor
from domain.frames import RawFrame, FrameBundle, DecodedFrame
from domain.conversion_options import ConversionOptions, clamp_quality
from domain.errors import NotARecordingError, UnsupportedFormatError

__all__ = [
    "StreamKind",
    "PixelFormat",
    "StreamDescriptor",
    "RawFrame",
    "FrameBundle",
    "DecodedFrame",
    "ConversionOptions",
    "clamp_quality",
    "NotARecordingError",
    "UnsupportedFormatError",
]
