"""Errors raised while converting a recording."""


class NotARecordingError(ValueError):
    """The input file exists but is not a readable recording."""


class UnsupportedFormatError(ValueError):
    """A frame arrived in a pixel format the decoder cannot convert."""

    def __init__(self, kind, pixel_format):
        super().__init__(f"unknown {kind.value} format: {pixel_format}")
        self.kind = kind
        self.pixel_format = pixel_format
