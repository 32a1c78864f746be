import logging
from typing import List, Optional

from app.schemas.blog import (
    PostDetail,
    PostPagination,
    PostSummary,
    PostView,
    RenderedSection,
)
from app.services.rich_text import as_html
from app.utils import WORDS_PER_MINUTE, estimate_reading_time, format_publication_date

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(
        self,
        repo,
        listing_page_size: int = 1,
        paths_page_size: int = 100,
        words_per_minute: int = WORDS_PER_MINUTE,
    ):
        self.repo = repo
        self.listing_page_size = listing_page_size
        self.paths_page_size = paths_page_size
        self.words_per_minute = words_per_minute

    def get_listing_page(self) -> PostPagination:
        response = self.repo.query_posts(self.listing_page_size)
        results = [map_post_summary(doc) for doc in response.get("results") or []]
        logger.info(
            f"Fetched {len(results)} post(s) for the listing, next_page={response.get('next_page')}"
        )
        return PostPagination(next_page=response.get("next_page"), results=results)

    def list_post_paths(self) -> List[str]:
        docs = self.repo.list_post_docs(self.paths_page_size)
        slugs = []
        for doc in docs:
            uid = doc.get("uid")
            if not uid:
                logger.warning(f"Skipping post without uid: {doc.get('id')}")
                continue
            slugs.append(uid)
        return slugs

    def get_post(self, slug: str) -> Optional[PostDetail]:
        doc = self.repo.get_post_doc(slug)
        if not doc:
            return None
        return map_post_detail(doc)

    def build_post_view(self, post: PostDetail) -> PostView:
        sections = [
            RenderedSection(heading=section.heading, body=as_html(section.body))
            for section in post.data.content
        ]
        return PostView(
            post=post,
            reading_time=estimate_reading_time(
                post.data.content, words_per_minute=self.words_per_minute
            ),
            published_on=format_publication_date(post.first_publication_date),
            sections=sections,
        )


def map_post_summary(doc: dict) -> PostSummary:
    data = doc.get("data") or {}
    return PostSummary(
        uid=doc.get("uid"),
        first_publication_date=doc.get("first_publication_date"),
        data={
            "title": data.get("title"),
            "subtitle": data.get("subtitle"),
            "author": data.get("author"),
        },
    )


def map_post_detail(doc: dict) -> PostDetail:
    data = doc.get("data") or {}
    banner = data.get("banner") or {}
    return PostDetail(
        uid=doc.get("uid"),
        first_publication_date=doc.get("first_publication_date"),
        data={
            "title": data.get("title"),
            "subtitle": data.get("subtitle"),
            "banner": {"url": banner.get("url")},
            "author": data.get("author"),
            "content": data.get("content") or [],
        },
    )
