"""Deterministic OpenAPI builder for the Main and Demo documents.

Two steps per request:
1. `build_raw_document` walks the Flask URL map and assembles a raw
   `Document`: one path per rule (Flask `<int:id>` becomes `{id}`), one
   operation per HTTP method, tags from `@tags`, an `ApiKey` security
   requirement for views wrapped in `@require_api_key`.
2. `build_pipeline` returns the configured filter pipeline (grouping, then
   path ordering when enabled), which decides membership and default tags.

Every call builds a fresh Document, so concurrent requests never share one.
"""
import copy
import re
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask

from .config.settings import SwaggerSettings, load_settings
from .decorators.auth import requires_api_key
from .decorators.openapi import get_tags
from .openapi_parts.constants import (
    API_KEY_SCHEME,
    DOC_MAIN,
    DOC_NAMES,
    GROUPING_PARTITION,
    OPENAPI_VERSION,
    SECURITY_SCHEMES,
)
from .openapi_parts.document import Document, Operation, PathItem
from .openapi_parts.filters import (
    DefaultGroupFilter,
    DocumentPipeline,
    LegacyDefaultGroupFilter,
    PathSortFilter,
)

__all__ = ["build_openapi_spec", "build_raw_document", "build_pipeline", "to_openapi_path"]

# Methods Flask adds implicitly; not documented as separate operations
IGNORED_METHODS = {"HEAD", "OPTIONS"}
# Endpoints serving the docs themselves (and static files) are not documented
IGNORED_BLUEPRINTS = {"docs"}
IGNORED_ENDPOINTS = {"static"}

_RULE_ARG = re.compile(r"<(?:(?P<conv>\w+)(?:\([^)]*\))?:)?(?P<name>\w+)>")

_CONVERTER_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "int": {"type": "integer"},
    "float": {"type": "number"},
    "uuid": {"type": "string", "format": "uuid"},
    "path": {"type": "string"},
    "string": {"type": "string"},
    "default": {"type": "string"},
}


def to_openapi_path(rule: str) -> Tuple[str, List[Dict[str, Any]]]:
    """Convert a Flask rule into an OpenAPI path template plus path parameters."""
    params: List[Dict[str, Any]] = []

    def repl(m: "re.Match[str]") -> str:
        name = m.group("name")
        schema = _CONVERTER_SCHEMAS.get(m.group("conv") or "default", {"type": "string"})
        params.append({"name": name, "in": "path", "required": True, "schema": dict(schema)})
        return "{" + name + "}"

    return _RULE_ARG.sub(repl, rule), params


def _operation_id(method: str, path: str) -> str:
    rid = path.strip("/").replace("/", "_").replace("{", "").replace("}", "").replace("-", "_")
    return f"{method}_{rid or 'root'}"


def _summary(view) -> Optional[str]:
    doc = (view.__doc__ or "").strip()
    return doc.splitlines()[0].strip() if doc else None


def _operation(method: str, path: str, view, params: List[Dict[str, Any]]) -> Operation:
    payload: Dict[str, Any] = {}
    summary = _summary(view)
    if summary:
        payload["summary"] = summary
    payload["operationId"] = _operation_id(method, path)
    if params:
        payload["parameters"] = copy.deepcopy(params)
    responses: Dict[str, Any] = {"200": {"description": "OK"}}
    if requires_api_key(view):
        responses["401"] = {"description": "Missing or invalid API key"}
        payload["security"] = [{API_KEY_SCHEME: []}]
    payload["responses"] = responses
    return Operation(method=method, tags=get_tags(view), payload=payload)


def _settings(app: Flask) -> SwaggerSettings:
    settings = app.extensions.get("swagger_settings")
    return settings if settings is not None else load_settings(app.config)


def build_raw_document(app: Flask, doc_name: str = DOC_MAIN) -> Document:
    if doc_name not in DOC_NAMES:
        raise KeyError(doc_name)
    settings = _settings(app)
    is_main = doc_name == DOC_MAIN
    doc = Document(
        title=settings.main_title if is_main else settings.demo_title,
        version=settings.version,
        description=settings.description if is_main else None,
        extra={
            "openapi": OPENAPI_VERSION,
            "components": {"securitySchemes": copy.deepcopy(SECURITY_SCHEMES)},
        },
    )
    for rule in app.url_map.iter_rules():
        if rule.endpoint in IGNORED_ENDPOINTS or rule.endpoint.split(".", 1)[0] in IGNORED_BLUEPRINTS:
            continue
        view = app.view_functions[rule.endpoint]
        path, params = to_openapi_path(rule.rule)
        item = doc.paths.get(path)
        if item is None:
            item = PathItem()
            doc.add_path(path, item)
        for method in sorted((rule.methods or set()) - IGNORED_METHODS):
            item.add_operation(_operation(method.lower(), path, view, params), path)
    return doc


def build_pipeline(settings: SwaggerSettings) -> DocumentPipeline:
    if settings.grouping_mode == GROUPING_PARTITION:
        filters: List[Any] = [DefaultGroupFilter()]
    else:
        filters = [LegacyDefaultGroupFilter()]
    if settings.sort_endpoints:
        filters.append(PathSortFilter())
    return DocumentPipeline(filters)


def build_openapi_spec(app: Flask, doc_name: str = DOC_MAIN) -> Dict[str, Any]:
    doc = build_raw_document(app, doc_name)
    build_pipeline(_settings(app)).apply(doc)
    return doc.to_dict()
