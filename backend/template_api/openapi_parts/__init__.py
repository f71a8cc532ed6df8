"""Document model, constants and filters for the OpenAPI post-processing pipeline.

The builder assembles a raw `document.Document` from the routes; the filters
in `filters` then partition, tag and order it before it is served.
"""

__all__ = [
    "constants",
    "document",
    "filters",
]
