from typing import Optional

from pydantic import Field

from common.schemas.request_base import BaseRequestModel


class LanguageCreate(BaseRequestModel):
    label: str = Field(..., min_length=1, examples=["বাংলা"])
    code: str = Field(..., min_length=2, max_length=5, examples=["bn"])
    country_code: str = Field(..., min_length=2, max_length=2, examples=["BD"])


class LanguageUpdate(BaseRequestModel):
    label: Optional[str] = Field(None, min_length=1)
    code: Optional[str] = Field(None, min_length=2, max_length=5)
    country_code: Optional[str] = Field(None, min_length=2, max_length=2)
