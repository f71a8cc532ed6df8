"""Public import for the OpenAPI builder and document pipeline.

Keeps a stable import path while the implementation lives in
`openapi_builder.py` and `openapi_parts/`.
"""
from .openapi_builder import build_openapi_spec, build_pipeline, build_raw_document  # noqa: F401
from .openapi_parts.document import Document, DocumentError, DuplicatePathError  # noqa: F401
from .openapi_parts.filters import (  # noqa: F401
    DefaultGroupFilter,
    DocumentPipeline,
    LegacyDefaultGroupFilter,
    PathSortFilter,
)

__all__ = [
    "build_openapi_spec",
    "build_pipeline",
    "build_raw_document",
    "Document",
    "DocumentError",
    "DuplicatePathError",
    "DefaultGroupFilter",
    "DocumentPipeline",
    "LegacyDefaultGroupFilter",
    "PathSortFilter",
]
