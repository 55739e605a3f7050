from .builders import ArtifactService
from .errors import ExtractionError, PathtreeError, SchemaMismatch, UnsupportedMediaTypeError, UpstreamError
from .extraction import extract, ingest
from .indexer import index
from .models import ExtractedDocument
from .structured import Fallback, Parsed, parse_structured

__all__ = [
    "ArtifactService",
    "ExtractedDocument",
    "ExtractionError",
    "Fallback",
    "Parsed",
    "PathtreeError",
    "SchemaMismatch",
    "UnsupportedMediaTypeError",
    "UpstreamError",
    "extract",
    "index",
    "ingest",
    "parse_structured",
]
