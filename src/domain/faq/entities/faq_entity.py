from typing import Optional

from pydantic import Field

from common.schemas.request_base import BaseRequestModel
from common.translations.resolver import MultilingualText


class FaqCreate(BaseRequestModel):
    question: MultilingualText = Field(..., examples=[{"en": "Question?", "bn": "প্রশ্ন?"}])
    answer: MultilingualText = Field(..., examples=[{"en": "Answer", "bn": "উত্তর"}])
    hide: bool = False
    position: Optional[int] = Field(None, ge=0)
    link: str = ""


class FaqUpdate(BaseRequestModel):
    question: Optional[MultilingualText] = None
    answer: Optional[MultilingualText] = None
    hide: Optional[bool] = None
    position: Optional[int] = Field(None, ge=0)
    link: Optional[str] = None
