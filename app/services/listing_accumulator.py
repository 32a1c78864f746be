import logging
from dataclasses import dataclass
from typing import List, Optional

import httpx

from app.schemas.blog import PostPagination, PostSummary
from app.services.posts_service import map_post_summary

logger = logging.getLogger(__name__)

STATUS_LOADED = "loaded"
STATUS_EXHAUSTED = "exhausted"
STATUS_BUSY = "busy"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class LoadMoreResult:
    status: str
    added: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_LOADED


class ListingAccumulator:
    """
    Growing list of post summaries for the listing page.
    Each load_more() appends the page behind next_page; state only ever grows.
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http
        self._posts: List[PostSummary] = []
        self._next_page: Optional[str] = None
        self._initialized = False
        self._in_flight = False

    @property
    def posts(self) -> List[PostSummary]:
        return list(self._posts)

    @property
    def next_page(self) -> Optional[str]:
        return self._next_page

    @property
    def has_more(self) -> bool:
        return bool(self._next_page)

    def initialize(self, pagination: PostPagination) -> None:
        if self._initialized:
            raise RuntimeError("Listing accumulator is already initialized")
        self._posts = list(pagination.results)
        self._next_page = pagination.next_page
        self._initialized = True

    def snapshot(self) -> PostPagination:
        return PostPagination(next_page=self._next_page, results=self._posts)

    async def load_more(self) -> LoadMoreResult:
        if not self.has_more:
            return LoadMoreResult(status=STATUS_EXHAUSTED)
        if self._in_flight:
            logger.warning("load_more called while a page request is outstanding")
            return LoadMoreResult(status=STATUS_BUSY)

        self._in_flight = True
        url = self._next_page
        try:
            response = await self.http.get(url)
            response.raise_for_status()
            payload = response.json()
            page = PostPagination(
                next_page=payload.get("next_page"),
                results=[map_post_summary(doc) for doc in payload.get("results") or []],
            )
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.error(f"Failed to load next page {url}: {e}")
            return LoadMoreResult(status=STATUS_FAILED, error=str(e))
        finally:
            self._in_flight = False

        self._posts = self._posts + page.results
        self._next_page = page.next_page
        logger.debug(f"Appended {len(page.results)} post(s), next_page={page.next_page}")
        return LoadMoreResult(status=STATUS_LOADED, added=len(page.results))
