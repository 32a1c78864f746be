from typing import Optional

from pydantic import BaseModel


class PrismicConfig(BaseModel):
    """Connection details for a Prismic repository API."""

    endpoint: str
    access_token: Optional[str] = None
    timeout: float = 10.0

    @property
    def search_url(self) -> str:
        return f"{self.endpoint.rstrip('/')}/documents/search"
