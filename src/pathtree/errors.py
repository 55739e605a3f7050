from __future__ import annotations


class PathtreeError(Exception):
    pass


class ExtractionError(PathtreeError):
    """The uploaded document could not be turned into text."""


class UnsupportedMediaTypeError(ExtractionError):
    def __init__(self, media_type: str) -> None:
        super().__init__(f"Unsupported media type: {media_type or '<unknown>'}")
        self.media_type = media_type


class UpstreamError(PathtreeError):
    """The text-generation service was unreachable or answered with an error."""


class SchemaMismatch(PathtreeError):
    """Generated output did not decode into the expected shape.

    Only raised and caught inside the structured parser; callers see the
    message on the resulting ``Fallback``.
    """
