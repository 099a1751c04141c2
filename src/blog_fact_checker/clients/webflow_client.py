"""Webflow CMS client for fetching, updating and publishing blog posts."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import httpx

from blog_fact_checker.models.blog import BlogPost

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.webflow.com/v2"
DEFAULT_CONTENT_FIELD = "post-body"
PAGE_SIZE = 100


class WebflowError(RuntimeError):
    """Raised when the Webflow API rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CredentialsMissingError(WebflowError):
    """Raised when no API token or collection ID is configured."""


def extract_slug_from_url(url: str) -> str:
    """Return the last path segment of a blog URL.

    >>> extract_slug_from_url("https://example.webflow.io/blog/my-post")
    'my-post'
    """
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL format")
    parts = [p for p in parsed.path.split("/") if p]
    if not parts:
        raise ValueError(f"No post slug in URL: {url!r}")
    return parts[-1]


class WebflowClient:
    """Async client for a single Webflow CMS collection."""

    def __init__(
        self,
        api_token: str | None,
        collection_id: str | None,
        *,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_token or not collection_id:
            raise CredentialsMissingError(
                "Webflow credentials not configured. Run `blog-fact-checker settings` first."
            )
        self.api_token = api_token
        self.collection_id = collection_id
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "accept": "application/json",
        }

    def _collection_path(self, *parts: str) -> str:
        return "/".join([f"{self.api_base}/collections/{self.collection_id}", *parts])

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
        not_found: str = "Resource not found.",
    ) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method, url, headers=self._headers(), json=json, params=params
                )
        except httpx.HTTPError as exc:
            logger.error("Webflow request failed: %s %s", method, url, exc_info=True)
            raise WebflowError(f"Request to Webflow failed: {exc}") from exc

        if response.status_code == 401:
            raise WebflowError(
                "Invalid API token. Please check your credentials.", status_code=401
            )
        if response.status_code == 404:
            raise WebflowError(not_found, status_code=404)
        if response.is_error:
            detail = response.reason_phrase
            try:
                detail = response.json().get("message") or detail
            except (ValueError, AttributeError):
                pass
            raise WebflowError(
                f"Webflow API error: {response.status_code} {detail}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        return response.json()

    async def list_items(self) -> list[dict]:
        """All items of the collection, following offset pagination."""
        items: list[dict] = []
        offset = 0
        while True:
            data = await self._request(
                "GET",
                self._collection_path("items"),
                params={"offset": offset, "limit": PAGE_SIZE},
                not_found="Collection not found. Please check your collection ID.",
            )
            page = data.get("items") or []
            items.extend(page)
            total = (data.get("pagination") or {}).get("total")
            offset += len(page)
            if not page or total is None or offset >= total:
                break
        logger.debug("Listed %d items from collection %s", len(items), self.collection_id)
        return items

    async def fetch_blog_by_url(
        self, url: str, content_field: str = DEFAULT_CONTENT_FIELD
    ) -> BlogPost:
        """Find the collection item whose slug matches the URL's last segment."""
        slug = extract_slug_from_url(url)
        for item in await self.list_items():
            field_data = item.get("fieldData") or {}
            if field_data.get("slug") == slug or item.get("slug") == slug:
                post = BlogPost(
                    id=item["id"],
                    slug=field_data.get("slug") or item.get("slug") or slug,
                    name=field_data.get("name") or item.get("name") or "",
                    content=field_data.get(content_field) or field_data.get("content") or "",
                    field_data=field_data,
                    is_draft=bool(item.get("isDraft", False)),
                )
                logger.info("Fetched post %r (%s)", post.name, post.id)
                return post
        raise WebflowError(f'Blog post with slug "{slug}" not found in collection.')

    async def update_blog_post(
        self, item_id: str, content: str, field_name: str = DEFAULT_CONTENT_FIELD
    ) -> dict:
        """Replace one field of a collection item."""
        result = await self._request(
            "PATCH",
            self._collection_path("items", item_id),
            json={"fieldData": {field_name: content}},
            not_found="Blog post not found.",
        )
        logger.info("Updated %s of item %s (%d chars)", field_name, item_id, len(content))
        return result

    async def publish_blog_post(self, item_id: str) -> dict:
        result = await self._request(
            "POST",
            self._collection_path("items", item_id, "publish"),
            not_found="Blog post not found.",
        )
        logger.info("Published item %s", item_id)
        return result
