import httpx
from fastapi import Depends

from app.db.prismic import get_prismic
from app.repos.posts_repo import PrismicPostsRepo
from app.services.posts_service import PostsService
from app.settings import settings


def get_prismic_client():
    with get_prismic() as client:
        yield client


def get_posts_repo(client=Depends(get_prismic_client)):
    return PrismicPostsRepo(client)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(
        repo=repo,
        listing_page_size=settings.LISTING_PAGE_SIZE,
        paths_page_size=settings.PATHS_PAGE_SIZE,
        words_per_minute=settings.READING_WORDS_PER_MINUTE,
    )


async def get_http_client():
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.PRISMIC_TIMEOUT_SECONDS),
        follow_redirects=True,
    ) as client:
        yield client
