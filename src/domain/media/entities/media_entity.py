from enum import Enum
from typing import Optional

from pydantic import Field

from common.schemas.request_base import BaseRequestModel


class MediaPurpose(str, Enum):
    ANNOUNCEMENT = "announcement"  # site-wide alerts/news
    METADATA = "metadata"  # favicons, SEO images
    LOGO = "logo"
    BANNER = "banner"  # hero/home sliders
    EQUIPMENT = "equipment"
    MENU_ITEM = "menu-item"  # food and drink images
    PROFILE = "profile"
    MESSAGE = "message"
    INVENTORY = "inventory"
    EMPLOYEE = "employee"
    ORDER = "order"
    PRODUCT = "product"
    CATEGORY = "category"
    FEEDBACK = "feedback"
    LEGAL = "legal"
    GENERAL = "general"


class RemoteUpload(BaseRequestModel):
    url: str = Field(..., min_length=1, description="HTTP URL or Base64 data URI")
    purpose: MediaPurpose = MediaPurpose.GENERAL
    name: Optional[str] = Field(None, description="Optional filename")
    ref_id: Optional[str] = Field(None, description="Id of the owning product or other entity")
