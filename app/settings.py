from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.schemas.prismic import PrismicConfig


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Prismic
    PRISMIC_API_ENDPOINT: str = "https://spacetraveling.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    PRISMIC_TIMEOUT_SECONDS: float = 10.0

    # Blog
    SITE_NAME: str = "spacetraveling"
    LISTING_PAGE_SIZE: int = 1
    PATHS_PAGE_SIZE: int = 100
    REVALIDATE_SECONDS: int = 60 * 30
    READING_WORDS_PER_MINUTE: int = 200

    # Static build
    SITE_OUTPUT_DIR: str = "out"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def prismic_config(self) -> PrismicConfig:
        return PrismicConfig(
            endpoint=self.PRISMIC_API_ENDPOINT,
            access_token=self.PRISMIC_ACCESS_TOKEN or None,
            timeout=self.PRISMIC_TIMEOUT_SECONDS,
        )


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
