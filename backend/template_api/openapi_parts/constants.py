"""Centralized constants for the OpenAPI document pipeline.

Document names, default tags and the demo path prefix live here so the
builder, the filters and the routes agree on them.
"""
from typing import Any, Dict, Tuple

OPENAPI_VERSION = "3.0.3"

# Logical documents served side by side
DOC_MAIN = "Main"
DOC_DEMO = "Demo"
DOC_NAMES: Tuple[str, ...] = (DOC_MAIN, DOC_DEMO)

# Synthetic tags given to operations that declare none
MAIN_TAG = "Main"
DEMO_TAG = "Demo"

# Paths under this prefix belong to the Demo document (compared case-insensitively)
DEMO_PATH_PREFIX = "/api/demo/"

# Substring of the document title marking the Demo document (case-insensitive)
DEMO_TITLE_MARKER = "demo"

HTTP_METHODS: Tuple[str, ...] = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

API_KEY_HEADER = "X-API-Key"
API_KEY_SCHEME = "ApiKey"

SECURITY_SCHEMES: Dict[str, Any] = {
    API_KEY_SCHEME: {
        "type": "apiKey",
        "in": "header",
        "name": API_KEY_HEADER,
        "description": f"API Key authentication using the '{API_KEY_HEADER}' header",
    }
}

GROUPING_PARTITION = "partition"
GROUPING_LEGACY = "legacy"
GROUPING_MODES: Tuple[str, ...] = (GROUPING_PARTITION, GROUPING_LEGACY)

__all__ = [
    "OPENAPI_VERSION",
    "DOC_MAIN",
    "DOC_DEMO",
    "DOC_NAMES",
    "MAIN_TAG",
    "DEMO_TAG",
    "DEMO_PATH_PREFIX",
    "DEMO_TITLE_MARKER",
    "HTTP_METHODS",
    "API_KEY_HEADER",
    "API_KEY_SCHEME",
    "SECURITY_SCHEMES",
    "GROUPING_PARTITION",
    "GROUPING_LEGACY",
    "GROUPING_MODES",
]
