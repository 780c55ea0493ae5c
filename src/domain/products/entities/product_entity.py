from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field

from common.schemas.request_base import BaseRequestModel
from common.translations.resolver import MultilingualText


class ProductCategory(str, Enum):
    TEA = "tea"
    COFFEE = "coffee"
    BEVERAGE = "beverage"
    DESERT = "desert"
    SNACKS = "snacks"


UnitKey = Literal["c", "g"]  # cup / glass


class Logistics(BaseRequestModel):
    stock: int = Field(0, ge=0)
    is_available: bool = True
    grand_total: float = Field(0, ge=0, description="Final price shown to customers")
    u_key: UnitKey = "c"
    calories: int = Field(0, ge=0)


class LogisticsPatch(BaseRequestModel):
    stock: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None
    grand_total: Optional[float] = Field(None, ge=0)
    u_key: Optional[UnitKey] = None
    calories: Optional[int] = Field(None, ge=0)


class ProductMedia(BaseRequestModel):
    thumbnail: str = ""
    gallery: List[str] = Field(default_factory=list)


class ProductCreate(BaseRequestModel):
    short_id: Optional[str] = Field(None, description="Explicit public id; generated from category/position/title when omitted")
    position: int = Field(0, ge=0)
    category: ProductCategory
    tags: List[str] = Field(default_factory=list)
    title: MultilingualText = Field(..., examples=[{"en": "Hot Milk Tea", "bn": "গরম দুধ চা"}])
    description: MultilingualText
    ingredients: Optional[MultilingualText] = None
    health_benefit: Optional[MultilingualText] = None
    origin: Optional[MultilingualText] = None
    fun_fact: Optional[MultilingualText] = None
    logistics: Logistics = Field(default_factory=Logistics)
    media: Optional[ProductMedia] = None


class ProductUpdate(BaseRequestModel):
    short_id: Optional[str] = None
    position: Optional[int] = Field(None, ge=0)
    category: Optional[ProductCategory] = None
    tags: Optional[List[str]] = None
    title: Optional[MultilingualText] = None
    description: Optional[MultilingualText] = None
    ingredients: Optional[MultilingualText] = None
    health_benefit: Optional[MultilingualText] = None
    origin: Optional[MultilingualText] = None
    fun_fact: Optional[MultilingualText] = None
    logistics: Optional[LogisticsPatch] = None


class MediaOrderUpdate(BaseRequestModel):
    thumbnail: str = Field(..., description="The URL that should become the thumbnail")
    gallery: List[str] = Field(default_factory=list, description="Gallery URLs in the desired order")
