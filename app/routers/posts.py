import logging
import time
from typing import Dict, Tuple

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.schemas.blog import PostDetail, PostPagination
from app.services.listing_accumulator import ListingAccumulator
from app.services.page_renderer import render_home, render_post
from app.services.posts_service import PostsService
from app.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()
MAX_PAGES = 50
LISTING_CACHE_KEY = "listing"
_listing_cache: Dict[str, Tuple[float, PostPagination]] = {}


@router.get("/", response_class=HTMLResponse)
async def home(
    pages: int = Query(1, ge=1, le=MAX_PAGES),
    service: PostsService = Depends(deps.get_posts_service),
    http: httpx.AsyncClient = Depends(deps.get_http_client),
):
    """Listing page with the first `pages` pages of posts loaded."""
    try:
        accumulator, loaded = await _accumulate(service, http, pages)
        load_more_href = f"/?pages={loaded + 1}" if accumulator.has_more else None
        return render_home(accumulator.posts, settings.SITE_NAME, load_more_href)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error rendering listing: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/api/posts", response_model=PostPagination)
async def list_posts(
    pages: int = Query(1, ge=1, le=MAX_PAGES),
    service: PostsService = Depends(deps.get_posts_service),
    http: httpx.AsyncClient = Depends(deps.get_http_client),
):
    """Posts accumulated over the first `pages` pages, with the next page pointer."""
    try:
        accumulator, _loaded = await _accumulate(service, http, pages)
        return accumulator.snapshot()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/post/{slug}", response_class=HTMLResponse)
def post_page(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    post = _get_post_or_404(slug, service)
    return render_post(service.build_post_view(post), settings.SITE_NAME)


@router.get("/api/posts/{slug}", response_model=PostDetail)
def get_post(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    """Get a single post by slug."""
    return _get_post_or_404(slug, service)


def _get_post_or_404(slug: str, service: PostsService) -> PostDetail:
    try:
        post = service.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


async def _accumulate(
    service: PostsService, http: httpx.AsyncClient, pages: int
) -> Tuple[ListingAccumulator, int]:
    listing = await run_in_threadpool(_get_listing, service)
    accumulator = ListingAccumulator(http)
    accumulator.initialize(listing)

    loaded = 1
    while loaded < pages and accumulator.has_more:
        result = await accumulator.load_more()
        if not result.ok:
            break
        loaded += 1
    return accumulator, loaded


def _get_listing(service: PostsService) -> PostPagination:
    now = time.monotonic()
    cached = _listing_cache.get(LISTING_CACHE_KEY)
    if cached and now - cached[0] < settings.REVALIDATE_SECONDS:
        return cached[1]

    listing = service.get_listing_page()
    _listing_cache[LISTING_CACHE_KEY] = (now, listing)
    return listing
