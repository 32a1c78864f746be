import logging
from pathlib import Path

from app.db.prismic import get_prismic
from app.dependencies import get_posts_repo, get_posts_service
from app.services.site_builder import build_site
from app.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    with get_prismic() as client:
        service = get_posts_service(repo=get_posts_repo(client=client))
        written = build_site(service, Path(settings.SITE_OUTPUT_DIR), settings.SITE_NAME)
    logger.info(f"Static build wrote {len(written)} file(s) to {settings.SITE_OUTPUT_DIR}")
