"""Confluence REST payload datatypes and their JSON decoders.

Decoders are tolerant: missing optional fields become ``None`` or empty
collections, and numeric ids are normalized to strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ConfluencePage:
    id: str
    title: str
    page_type: str = "page"
    status: str = "current"
    labels: tuple[str, ...] = ()
    webui: str | None = None
    ancestor_ids: tuple[str, ...] = field(default_factory=tuple)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.page_type,
            "status": self.status,
            "labels": list(self.labels),
            "webui": self.webui,
        }


@dataclass(frozen=True)
class ConfluenceSpace:
    id: str
    key: str
    name: str
    space_type: str = "global"
    status: str = "current"
    description: str | None = None


def _as_id(value: object) -> str:
    if isinstance(value, bool) or value is None:
        return ""
    return str(value)


def _as_dict(value: object) -> dict:
    return value if isinstance(value, dict) else {}


def parse_label_names(payload: object) -> tuple[str, ...]:
    """Extract label names from a ``{"results": [{"name": ...}, ...]}`` object."""
    results = _as_dict(payload).get("results")
    if not isinstance(results, list):
        return ()
    names: list[str] = []
    for item in results:
        name = _as_dict(item).get("name")
        if isinstance(name, str) and name:
            names.append(name)
    return tuple(names)


def parse_page(payload: object) -> ConfluencePage:
    data = _as_dict(payload)
    metadata = _as_dict(data.get("metadata"))
    links = _as_dict(data.get("_links"))
    ancestors = data.get("ancestors")
    ancestor_ids: tuple[str, ...] = ()
    if isinstance(ancestors, list):
        ancestor_ids = tuple(_as_id(_as_dict(item).get("id")) for item in ancestors)
    webui = links.get("webui")
    return ConfluencePage(
        id=_as_id(data.get("id")),
        title=str(data.get("title") or ""),
        page_type=str(data.get("type") or "page"),
        status=str(data.get("status") or "current"),
        labels=parse_label_names(metadata.get("labels")),
        webui=webui if isinstance(webui, str) else None,
        ancestor_ids=ancestor_ids,
    )


def parse_space(payload: object) -> ConfluenceSpace:
    data = _as_dict(payload)
    plain = _as_dict(_as_dict(data.get("description")).get("plain"))
    description = plain.get("value")
    return ConfluenceSpace(
        id=_as_id(data.get("id")),
        key=str(data.get("key") or ""),
        name=str(data.get("name") or ""),
        space_type=str(data.get("type") or "global"),
        status=str(data.get("status") or "current"),
        description=description if isinstance(description, str) and description else None,
    )


def parse_results(payload: object) -> list[dict]:
    results = _as_dict(payload).get("results")
    if not isinstance(results, list):
        return []
    return [item for item in results if isinstance(item, dict)]


def has_next_page(payload: object, batch_size: int, requested_limit: int) -> bool:
    """Whether a search response says more results follow.

    ``_links.next`` is authoritative when the server sends ``_links``. Without
    it, a batch filling the server's own ``limit`` (which may be lower than the
    requested one) means another page may exist.
    """
    data = _as_dict(payload)
    if batch_size == 0:
        return False
    links = data.get("_links")
    if isinstance(links, dict):
        return bool(links.get("next"))
    page_limit = data.get("limit")
    if not isinstance(page_limit, int) or page_limit <= 0:
        page_limit = requested_limit
    return batch_size >= page_limit
