import logging

from fastapi import FastAPI

from app.routers import posts
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.SITE_NAME, description="Blog pages rendered from Prismic")

app.include_router(posts.router)


@app.get("/health")
async def health():
    return {"message": f"{settings.SITE_NAME} is running"}
