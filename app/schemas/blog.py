from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostSummaryData(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    subtitle: Optional[str] = None
    author: Optional[str] = None


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: Optional[str] = None
    first_publication_date: Optional[str] = None
    data: PostSummaryData


class PostPagination(BaseModel):
    next_page: Optional[str] = None
    results: List[PostSummary] = Field(default_factory=list)


class RichTextBlock(BaseModel):
    """A single structured-text block; kinds without text (image, embed) keep text=None."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    text: Optional[str] = None
    spans: List[Dict[str, Any]] = Field(default_factory=list)


class ContentSection(BaseModel):
    model_config = ConfigDict(extra="allow")

    heading: str = ""
    body: List[RichTextBlock] = Field(default_factory=list)

    @field_validator("heading", mode="before")
    @classmethod
    def _blank_heading(cls, value):
        return "" if value is None else value


class Banner(BaseModel):
    url: Optional[str] = None


class PostDetailData(BaseModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    author: Optional[str] = None
    banner: Banner = Field(default_factory=Banner)
    content: List[ContentSection] = Field(default_factory=list)


class PostDetail(BaseModel):
    uid: Optional[str] = None
    first_publication_date: Optional[str] = None
    data: PostDetailData


class RenderedSection(BaseModel):
    heading: str
    body: str


class PostView(BaseModel):
    """Post page props: the detail plus the values derived for display."""

    post: PostDetail
    reading_time: int
    published_on: str
    sections: List[RenderedSection]
