# File: src/api/routers/pages/pages.py

from fastapi import APIRouter, status

from api.dependencies import PageServiceDep
from common.schemas.standard_response import StandardResponse
from common.translations.messages import get_message
from domain.pages.entities.page_entity import PageCreate, PageUpdate

router = APIRouter(prefix="/pages", tags=["Pages"])


@router.get(
    "/registry/{lang}",
    response_model=StandardResponse,
    summary="All pages keyed by page key",
    description="Used by the frontend to build navigation and page metadata in one request."
)
async def get_registry(lang: str, service: PageServiceDep):
    return StandardResponse.success(await service.get_registry(lang), get_message("page.retrieved", lang))


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Create a page",
    responses={409: {"description": "Page key already exists."}}
)
async def create_page(body: PageCreate, service: PageServiceDep):
    page = await service.create(body.to_document())
    return StandardResponse.success(page, get_message("page.created"), 201)


@router.patch("/{key}", response_model=StandardResponse, summary="Update a page by key")
async def update_page(key: str, body: PageUpdate, service: PageServiceDep):
    page = await service.update(key, body.to_document(partial=True))
    return StandardResponse.success(page, get_message("page.updated"))


@router.get("/admin/raw", response_model=StandardResponse, summary="All pages, raw")
async def get_all_raw(service: PageServiceDep):
    return StandardResponse.success(await service.find_all_raw(), get_message("page.retrieved"))


@router.get("/key/{lang}/{key}", response_model=StandardResponse, summary="One page for one language")
async def get_by_key(lang: str, key: str, service: PageServiceDep):
    page = await service.find_one_transformed(key, lang)
    return StandardResponse.success(page, get_message("page.retrieved", lang))


@router.get("/admin/key/{key}", response_model=StandardResponse, summary="One page by key, raw")
async def get_raw_by_key(key: str, service: PageServiceDep):
    return StandardResponse.success(await service.find_one_raw_by_key(key), get_message("page.retrieved"))


@router.delete("/{key}", response_model=StandardResponse, summary="Delete a page by key")
async def delete_page(key: str, service: PageServiceDep):
    return StandardResponse.success(await service.remove(key), get_message("page.deleted"))
