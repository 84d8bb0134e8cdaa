"""Content API (Prismic REST v2 shaped) queries."""

from __future__ import annotations

import json
import logging
import urllib.error
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from ..config import ACCESS_TOKEN, API_ENDPOINT, CACHE_DIR, REVALIDATE_SECONDS
from .cache import DiskCache
from .client import CMSClient, HTTPError, get_client
from .errors import FetchError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """Raw documents of one search page plus the next-page cursor."""

    results: list[dict[str, Any]]
    next_cursor: str | None


def at(path: str, value: str) -> str:
    """Equality predicate, e.g. ``[at(document.type, "posts")]``."""
    return f"[at({path}, {json.dumps(value)})]"


class ContentAPI:
    """Read-only access to a content repository.

    Every search is pinned to a ref: the master ref read from the API root, or
    a preview ref given at construction.
    """

    def __init__(
        self,
        endpoint: str = API_ENDPOINT,
        access_token: str | None = ACCESS_TOKEN,
        ref: str | None = None,
        client: CMSClient | None = None,
        cache: DiskCache | None = None,
        use_cache: bool = True,
        force: bool = False,
    ):
        self.endpoint = endpoint.rstrip("/")
        self._access_token = access_token
        self._preview_ref = ref
        self._master_ref: str | None = None
        self._client = client or get_client()
        if cache is None and use_cache:
            cache = DiskCache(CACHE_DIR)
        self._cache = cache
        self._force = force

    @property
    def preview(self) -> bool:
        return self._preview_ref is not None

    async def master_ref(self) -> str:
        """Read the current master ref from the API root."""
        data = await self._get_json(self._with_token(self.endpoint), max_age_seconds=REVALIDATE_SECONDS)
        refs = data.get("refs") if isinstance(data, dict) else None
        for ref in refs or []:
            if isinstance(ref, dict) and ref.get("isMasterRef") and ref.get("ref"):
                return str(ref["ref"])
        raise FetchError(f"API root {self.endpoint} lists no master ref")

    async def ref(self) -> str:
        if self._preview_ref is not None:
            return self._preview_ref
        if self._master_ref is None:
            self._master_ref = await self.master_ref()
        return self._master_ref

    async def query(
        self,
        predicates: list[str],
        *,
        orderings: str | None = None,
        page_size: int = 20,
        page_cursor: str | None = None,
        fetch: list[str] | None = None,
        after: str | None = None,
    ) -> QueryResult:
        """Run a document search.

        Args:
            predicates: Predicates rendered with ``at()`` and friends
            orderings: e.g. ``[document.first_publication_date desc]``
            page_size: Documents per page
            page_cursor: ``next_page`` of a previous result; when given it is
                fetched as-is and the other arguments are ignored
            fetch: Restrict ``data`` to these ``type.field`` names
            after: Start after this document id

        Returns:
            QueryResult with the raw documents and the next cursor

        Raises:
            FetchError: Transport failure or malformed response
        """
        if page_cursor is not None:
            url = page_cursor
        else:
            params: list[tuple[str, str]] = [
                ("ref", await self.ref()),
                ("q", "[" + "".join(predicates) + "]"),
                ("pageSize", str(page_size)),
            ]
            if orderings:
                params.append(("orderings", orderings))
            if fetch:
                params.append(("fetch", ",".join(fetch)))
            if after:
                params.append(("after", after))
            if self._access_token:
                params.append(("access_token", self._access_token))
            url = f"{self.endpoint}/documents/search?{urlencode(params)}"

        logger.debug("Search %s orderings=%s after=%s cursor=%s", predicates, orderings, after, page_cursor is not None)
        data = await self._get_json(url)

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise FetchError(f"Malformed search response: no results list ({self.endpoint})")
        return QueryResult(results=results, next_cursor=data.get("next_page") or None)

    async def get_by_uid(self, doc_type: str, uid: str) -> dict[str, Any]:
        """Fetch a single document by its uid.

        Raises:
            NotFoundError: No document of that type has this uid
        """
        result = await self.query([at(f"my.{doc_type}.uid", uid)], page_size=1)
        if not result.results:
            raise NotFoundError(doc_type, uid)
        return result.results[0]

    def _with_token(self, url: str) -> str:
        if not self._access_token:
            return url
        sep = "&" if "?" in url else "?"
        return f"{url}{sep}{urlencode({'access_token': self._access_token})}"

    async def _get_json(self, url: str, max_age_seconds: int | None = None) -> Any:
        if self._cache is not None and not self._force:
            cached = self._cache.get(url, max_age_seconds=max_age_seconds)
            if cached is not None:
                return cached

        try:
            data, _headers = await self._client.fetch_json(url)
        except HTTPError as e:
            raise FetchError(f"Content API returned HTTP {e.status_code}") from e
        except (urllib.error.URLError, OSError) as e:
            raise FetchError(f"Content API request failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Content API returned invalid JSON: {e}") from e

        if self._cache is not None:
            self._cache.put(url, data)
        return data
