# File: src/api/routers/all_endpoints.py

from fastapi import APIRouter

from api.routers.faq import faq
from api.routers.languages import languages
from api.routers.media import media
from api.routers.pages import pages
from api.routers.products import products
from api.routers.utility_routes import router as utility_router

# Main router
all_routers = APIRouter()

all_routers.include_router(products.router)
all_routers.include_router(faq.router)
all_routers.include_router(pages.router)
all_routers.include_router(languages.router)
all_routers.include_router(media.router)

all_routers.include_router(utility_router)
