"""Document filters applied after the raw OpenAPI document is assembled.

Each filter exposes `apply(document)` and mutates the document in place.
`DocumentPipeline` runs an explicit, ordered list of them:

    pipeline = DocumentPipeline([DefaultGroupFilter(), PathSortFilter()])
    pipeline.apply(doc)             # in place
    fresh = pipeline.process(doc)   # processed copy, `doc` untouched

Filters hold only their constructor parameters, so one instance can be reused
across documents. A single document must not be processed from two call sites
at once.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .constants import DEMO_PATH_PREFIX, DEMO_TAG, DEMO_TITLE_MARKER, MAIN_TAG
from .document import Document, Tag

logger = logging.getLogger(__name__)


def is_demo_document(title: Optional[str], marker: str = DEMO_TITLE_MARKER) -> bool:
    return marker.casefold() in (title or "").casefold()


def is_demo_path(path_key: str, prefix: str = DEMO_PATH_PREFIX) -> bool:
    return path_key.casefold().startswith(prefix.casefold())


def rebuild_tags(document: Document) -> None:
    """Replace the top-level tag set with the tags operations actually use.

    Names are deduplicated and sorted ordinally. Descriptions of tags that
    were already declared are kept.
    """
    known: Dict[str, Tag] = {}
    for t in document.tags:
        known.setdefault(t.name, t)
    names = {name for _, op in document.iter_operations() for name in op.tags}
    document.tags = [known.get(name) or Tag(name=name) for name in sorted(names)]


class DefaultGroupFilter:
    """Partition paths between the Main and Demo documents and tag orphans.

    The document being generated is the Demo one when its title contains
    "demo" (any case). A path belongs to it when its key starts with the demo
    prefix (any case); every other path belongs to Main. Paths that do not
    belong to the current document are removed. Retained operations without
    tags receive the document's default tag.
    """

    def __init__(
        self,
        demo_prefix: str = DEMO_PATH_PREFIX,
        demo_tag: str = DEMO_TAG,
        main_tag: str = MAIN_TAG,
        title_marker: str = DEMO_TITLE_MARKER,
    ):
        self.demo_prefix = demo_prefix
        self.demo_tag = demo_tag
        self.main_tag = main_tag
        self.title_marker = title_marker

    def apply(self, document: Document) -> None:
        target_demo = is_demo_document(document.title, self.title_marker)
        default_tag = self.demo_tag if target_demo else self.main_tag
        kept = []
        tagged = 0
        for key, item in document.paths.items():
            if is_demo_path(key, self.demo_prefix) != target_demo:
                continue
            kept.append((key, item))
            for op in item.iter_operations():
                if not op.tags:
                    op.tags = [default_tag]
                    tagged += 1
        dropped = len(document.paths) - len(kept)
        document.replace_paths(kept)
        rebuild_tags(document)
        logger.debug(
            "grouped document %r: kept=%d dropped=%d default_tagged=%d",
            document.title, len(kept), dropped, tagged,
        )


class LegacyDefaultGroupFilter:
    """Tag-only grouping: keeps every path, tags untagged operations "Main"."""

    def __init__(self, main_tag: str = MAIN_TAG):
        self.main_tag = main_tag

    def apply(self, document: Document) -> None:
        for _, op in document.iter_operations():
            if not op.tags:
                op.tags = [self.main_tag]
        rebuild_tags(document)


class PathSortFilter:
    """Order paths by key using plain (ordinal) string comparison."""

    def apply(self, document: Document) -> None:
        document.replace_paths(sorted(document.paths.items(), key=lambda kv: kv[0]))


class DocumentPipeline:
    def __init__(self, filters: Optional[Iterable] = None):
        self.filters: List = list(filters or [])

    def apply(self, document: Document) -> None:
        for f in self.filters:
            f.apply(document)

    def process(self, document: Document) -> Document:
        out = document.copy()
        self.apply(out)
        return out

    def __repr__(self) -> str:
        return f"DocumentPipeline({[type(f).__name__ for f in self.filters]})"


__all__ = [
    "DefaultGroupFilter",
    "LegacyDefaultGroupFilter",
    "PathSortFilter",
    "DocumentPipeline",
    "is_demo_document",
    "is_demo_path",
    "rebuild_tags",
]
