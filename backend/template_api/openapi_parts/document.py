"""In-memory OpenAPI document model used by the post-processing pipeline.

The model keeps only what the filters need to reason about (titles, path keys,
per-verb operations and their tags). Every other OpenAPI key is carried
through untouched so a document can be loaded with `Document.from_dict`,
processed, and rendered again with `Document.to_dict`.

Path keys are unique. Any attempt to build a mapping with the same key twice
raises `DuplicatePathError` instead of silently keeping one of the entries.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .constants import HTTP_METHODS, OPENAPI_VERSION


class DocumentError(ValueError):
    """Input violates the document contract."""


class DuplicatePathError(DocumentError):
    def __init__(self, path_key: str):
        super().__init__(f"Duplicate path key {path_key!r}")
        self.path_key = path_key


class DuplicateOperationError(DocumentError):
    def __init__(self, path_key: str, method: str):
        super().__init__(f"Path {path_key!r} already defines {method.upper()}")
        self.path_key = path_key
        self.method = method


@dataclass
class Tag:
    name: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.description:
            out["description"] = self.description
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tag":
        return cls(name=data["name"], description=data.get("description"))


@dataclass
class Operation:
    method: str
    tags: List[str] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        names, self.tags = self.tags, []
        for name in names:
            self.add_tag(name)

    def add_tag(self, name: str) -> None:
        if name not in self.tags:
            self.tags.append(name)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.tags:
            out["tags"] = list(self.tags)
        out.update(self.payload)
        return out

    @classmethod
    def from_dict(cls, method: str, data: Mapping[str, Any]) -> "Operation":
        op = cls(method=method.lower())
        for name in data.get("tags") or []:
            op.add_tag(name)
        op.payload = {k: v for k, v in data.items() if k != "tags"}
        return op


@dataclass
class PathItem:
    operations: Dict[str, Operation] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def add_operation(self, operation: Operation, path_key: str = "") -> None:
        if operation.method in self.operations:
            raise DuplicateOperationError(path_key, operation.method)
        self.operations[operation.method] = operation

    def iter_operations(self) -> Iterator[Operation]:
        return iter(self.operations.values())

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        for method, op in self.operations.items():
            out[method] = op.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PathItem":
        item = cls()
        for key, value in data.items():
            if key.lower() in HTTP_METHODS:
                item.add_operation(Operation.from_dict(key, value))
            else:
                item.extra[key] = value
        return item


class Document:
    """A single API description being generated.

    `info` holds the OpenAPI info object; `title` is read from it and a
    missing title is reported as an empty string. `extra` carries top-level
    keys such as `components` and `security`.
    """

    def __init__(
        self,
        title: Optional[str] = "",
        version: str = "1.0.0",
        description: Optional[str] = None,
        paths: Optional[Iterable[Tuple[str, PathItem]]] = None,
        tags: Optional[Iterable[Tag]] = None,
        extra: Optional[Dict[str, Any]] = None,
        info: Optional[Dict[str, Any]] = None,
    ):
        self.info: Dict[str, Any] = dict(info or {})
        if title is not None:
            self.info["title"] = title
        self.info.setdefault("version", version)
        if description:
            self.info["description"] = description
        self.paths: Dict[str, PathItem] = {}
        if paths is not None:
            self.replace_paths(paths)
        self.tags: List[Tag] = list(tags or [])
        self.extra: Dict[str, Any] = dict(extra or {})

    @property
    def title(self) -> str:
        return self.info.get("title") or ""

    def add_path(self, path_key: str, item: PathItem) -> None:
        if path_key in self.paths:
            raise DuplicatePathError(path_key)
        self.paths[path_key] = item

    def replace_paths(self, pairs: Iterable[Tuple[str, PathItem]]) -> None:
        fresh: Dict[str, PathItem] = {}
        for key, item in pairs:
            if key in fresh:
                raise DuplicatePathError(key)
            fresh[key] = item
        self.paths = fresh

    def iter_operations(self) -> Iterator[Tuple[str, Operation]]:
        for key, item in self.paths.items():
            for op in item.iter_operations():
                yield key, op

    def tag_names(self) -> List[str]:
        return [t.name for t in self.tags]

    def copy(self) -> "Document":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "openapi": self.extra.get("openapi", OPENAPI_VERSION),
            "info": {**self.info, "title": self.title},
            "paths": {k: v.to_dict() for k, v in self.paths.items()},
        }
        for key, value in self.extra.items():
            if key != "openapi":
                out[key] = value
        if self.tags:
            out["tags"] = [t.to_dict() for t in self.tags]
        return out

    @classmethod
    def from_dict(cls, spec: Mapping[str, Any]) -> "Document":
        raw_paths = spec.get("paths") or {}
        if not isinstance(raw_paths, Mapping):
            raise DocumentError("'paths' must be a mapping of path key to path item")
        doc = cls(title=None, info=dict(spec.get("info") or {}))
        for key, value in raw_paths.items():
            doc.add_path(key, PathItem.from_dict(value or {}))
        doc.tags = [Tag.from_dict(t) for t in spec.get("tags") or []]
        doc.extra = {k: copy.deepcopy(v) for k, v in spec.items() if k not in ("info", "paths", "tags")}
        return doc

    def __repr__(self) -> str:
        return f"Document(title={self.title!r}, paths={len(self.paths)}, tags={self.tag_names()!r})"


__all__ = [
    "Document",
    "PathItem",
    "Operation",
    "Tag",
    "DocumentError",
    "DuplicatePathError",
    "DuplicateOperationError",
]
