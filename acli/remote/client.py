"""Synchronous Confluence REST client used by discovery and the ctag command.

Wraps one ``httpx.Client`` configured with basic auth and JSON headers.
Transport failures surface as ``RemoteRequestFailed``; HTTP failures map to
the narrower ``ConfluenceError`` subclasses per endpoint.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from urllib.parse import quote, urlparse

import httpx

from ..domain.models import Project
from ..errors import (
    ApiError,
    ConfigurationMissing,
    LabelOperationFailed,
    PageNotFound,
    RemoteQueryFailed,
    RemoteRequestFailed,
)
from .models import (
    ConfluencePage,
    ConfluenceSpace,
    has_next_page,
    parse_label_names,
    parse_page,
    parse_results,
    parse_space,
)

logger = logging.getLogger(__name__)

API_ROOT = "/wiki/rest/api"
SEARCH_EXPAND = "metadata.labels,ancestors"
SPACE_LIMIT = 1000
DEFAULT_TIMEOUT = 30.0


def _error_text(response: httpx.Response) -> str:
    return f"HTTP {response.status_code}: {response.text}"


class ConfluenceClient:
    """Thin typed facade over the Confluence v1 content, label, and space endpoints."""

    def __init__(
        self,
        base_url: str,
        username: str,
        api_token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationMissing(f"Invalid base URL: {base_url!r}")
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            auth=(username, api_token),
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ConfluenceClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: object) -> httpx.Response:
        url = f"{API_ROOT}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(method, url, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            raise RemoteRequestFailed(f"{method} {url} failed: {exc}") from exc
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> object:
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteRequestFailed(f"Invalid JSON from {response.request.url}: {exc}") from exc

    # Pages

    def query_pages(self, cql: str, limit: int = 100) -> list[ConfluencePage]:
        """Return every page matching ``cql``.

        Pages are requested by ``start`` offset and advance by the size of the
        batch actually returned; the server may cap ``limit`` below the
        requested value.
        """
        pages: list[ConfluencePage] = []
        start = 0
        while True:
            response = self._request(
                "GET",
                "/content/search",
                params={"cql": cql, "expand": SEARCH_EXPAND, "start": start, "limit": limit},
            )
            if not response.is_success:
                raise RemoteQueryFailed(cql, _error_text(response))
            payload = self._json(response)
            batch = parse_results(payload)
            pages.extend(parse_page(item) for item in batch)
            if not has_next_page(payload, len(batch), limit):
                break
            start += len(batch)
        logger.info("CQL %r matched %d pages", cql, len(pages))
        return pages

    def get_page_labels(self, page_id: str) -> list[str]:
        response = self._request("GET", f"/content/{page_id}/label")
        if response.status_code == 404:
            raise PageNotFound(page_id)
        if not response.is_success:
            raise ApiError(response.status_code, response.text)
        return list(parse_label_names(self._json(response)))

    def add_page_labels(self, page_id: str, labels: Iterable[str]) -> None:
        body = [{"prefix": "global", "name": label} for label in labels]
        if not body:
            return
        response = self._request("POST", f"/content/{page_id}/label", json=body)
        if response.status_code == 404:
            raise PageNotFound(page_id)
        if not response.is_success:
            raise LabelOperationFailed(f"Failed to add labels to page {page_id}: {_error_text(response)}")

    def remove_page_labels(self, page_id: str, labels: Iterable[str]) -> None:
        """Delete each label; a 404 means the label is already absent."""
        for label in labels:
            response = self._request("DELETE", f"/content/{page_id}/label/{quote(label, safe='')}")
            if response.status_code == 404:
                logger.debug("label %r already absent on page %s", label, page_id)
                continue
            if not response.is_success:
                raise LabelOperationFailed(
                    f"Failed to remove label '{label}' from page {page_id}: {_error_text(response)}"
                )

    def update_page_label(self, page_id: str, old_label: str, new_label: str) -> None:
        self.remove_page_labels(page_id, [old_label])
        self.add_page_labels(page_id, [new_label])

    def bulk_add_labels(self, page_ids: Iterable[str], labels: list[str]) -> None:
        for page_id in page_ids:
            self.add_page_labels(page_id, labels)

    def bulk_update_labels(self, page_ids: Iterable[str], pairs: list[tuple[str, str]]) -> None:
        for page_id in page_ids:
            for old_label, new_label in pairs:
                self.update_page_label(page_id, old_label, new_label)

    def bulk_remove_labels(self, page_ids: Iterable[str], labels: list[str]) -> None:
        for page_id in page_ids:
            self.remove_page_labels(page_id, labels)

    # Spaces

    def list_spaces(self) -> list[ConfluenceSpace]:
        response = self._request(
            "GET",
            "/space",
            params={"expand": "description.plain", "limit": SPACE_LIMIT},
        )
        if not response.is_success:
            raise ApiError(response.status_code, response.text)
        return [parse_space(item) for item in parse_results(self._json(response))]

    def list_projects(self) -> list[Project]:
        """Return spaces as generic ``Project`` values for the navigation tree."""
        return [
            Project(
                id=space.id,
                key=space.key,
                name=space.name,
                description=space.description,
                project_type="space",
            )
            for space in self.list_spaces()
        ]

    def check_connectivity(self) -> bool:
        try:
            response = self._request("GET", "/space", params={"limit": 1})
        except RemoteRequestFailed as exc:
            logger.warning("connectivity check failed: %s", exc)
            return False
        return response.is_success
