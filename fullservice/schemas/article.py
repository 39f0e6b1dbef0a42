from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fullservice.schemas.user import IdentitySummary


class SocialLink(BaseModel):
    platform: str
    url: str
    icon: str = ""


class ArticleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    images: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    product_links: List[str] = Field(default_factory=list)
    social_links: List[SocialLink] = Field(default_factory=list)


class ArticleRead(BaseModel):
    id: int
    author_id: int
    title: str
    content: str
    images: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    product_links: List[str] = Field(default_factory=list)
    social_links: List[SocialLink] = Field(default_factory=list)
    is_active: bool
    created_at: datetime

    author: Optional[IdentitySummary] = None

    model_config = ConfigDict(from_attributes=True)
