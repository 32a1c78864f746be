import logging
from pathlib import Path
from typing import List

from app.services.page_renderer import render_fallback, render_home, render_post
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

FALLBACK_FILE = "post/_fallback.html"


def build_site(service: PostsService, out_dir: Path, site_name: str) -> List[Path]:
    """
    Generate the static site: listing, one page per known post and the fallback page.
    Content source errors propagate and abort the build.
    """
    out_dir = Path(out_dir)
    written: List[Path] = []

    listing = service.get_listing_page()
    # The static listing has no server to follow next_page, so the control is hidden.
    written.append(_write(out_dir / "index.html", render_home(listing.results, site_name)))

    slugs = service.list_post_paths()
    logger.info(f"Generating {len(slugs)} post page(s)")
    for slug in slugs:
        post = service.get_post(slug)
        if not post:
            logger.warning(f"Post {slug} disappeared between path listing and fetch")
            continue
        view = service.build_post_view(post)
        written.append(
            _write(out_dir / "post" / slug / "index.html", render_post(view, site_name))
        )

    written.append(_write(out_dir / FALLBACK_FILE, render_fallback(site_name)))
    return written


def _write(path: Path, markup: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(markup, encoding="utf-8")
    logger.debug(f"Wrote {path}")
    return path
