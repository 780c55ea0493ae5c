from typing import Dict, List, Optional

from pydantic import Field

from common.schemas.request_base import BaseRequestModel
from common.translations.resolver import MultilingualText


class Seo(BaseRequestModel):
    keywords: Dict[str, List[str]] = Field(default_factory=dict, examples=[{"en": ["tea"], "bn": ["চা"]}])
    og_image: str = ""
    is_no_index: bool = False


class PageCreate(BaseRequestModel):
    key: str = Field(..., min_length=1, examples=["home"], description="Stable internal identifier")
    link: str = Field(..., min_length=1, examples=["/"])
    title: MultilingualText = Field(..., examples=[{"en": "Home", "bn": "হোম"}])
    description: MultilingualText
    icon: Optional[str] = None
    video_url: Optional[str] = None
    seo: Optional[Seo] = None
    content: Optional[Dict[str, MultilingualText]] = Field(None, description="Custom page-specific labels")


class PageUpdate(BaseRequestModel):
    link: Optional[str] = None
    title: Optional[MultilingualText] = None
    description: Optional[MultilingualText] = None
    icon: Optional[str] = None
    video_url: Optional[str] = None
    seo: Optional[Seo] = None
    content: Optional[Dict[str, MultilingualText]] = None
