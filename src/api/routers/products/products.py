# File: src/api/routers/products/products.py

from typing import Annotated, List, Optional

from fastapi import APIRouter, File, Query, UploadFile, status

from api.dependencies import ProductServiceDep
from common.schemas.standard_response import StandardResponse
from common.translations.messages import get_message
from domain.products.entities.product_entity import MediaOrderUpdate, ProductCategory, ProductCreate, ProductUpdate
from domain.products.services.product_service import MediaUpload

router = APIRouter(prefix="/products", tags=["Products"])

PageQuery = Annotated[int, Query(ge=1, description="1-based page number")]
LimitQuery = Annotated[int, Query(ge=1, le=100, description="Items per page")]
CategoryQuery = Annotated[Optional[ProductCategory], Query(alias="cat", description="Restrict to one category")]


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Create a product",
    responses={400: {"description": "English title or description missing."}, 409: {"description": "shortId already taken."}}
)
async def create_product(body: ProductCreate, service: ProductServiceDep):
    product = await service.create(body.to_document())
    return StandardResponse.success(product, get_message("product.created"), 201)


@router.get("/stats/count", response_model=StandardResponse, summary="Catalog statistics")
async def get_stats(service: ProductServiceDep):
    stats = await service.get_product_stats()
    return StandardResponse.success(stats, get_message("product.stats"))


@router.get(
    "/search/{lang}",
    response_model=StandardResponse,
    summary="Search available products",
    description="Case-insensitive substring match over titles, descriptions, tags and shortId."
)
async def search_products(
    lang: str,
    service: ProductServiceDep,
    q: Annotated[str, Query(min_length=1, description="Search text")],
    cat: CategoryQuery = None,
    page: PageQuery = 1,
    limit: LimitQuery = 10,
):
    result = await service.search_products(lang, q, cat.value if cat else None, page, limit)
    return StandardResponse.success(result, get_message("product.retrieved", lang))


@router.get("/menu/{lang}", response_model=StandardResponse, summary="Menu cards for one language")
async def get_menu(
    lang: str,
    service: ProductServiceDep,
    page: PageQuery = 1,
    limit: LimitQuery = 10,
    cat: CategoryQuery = None,
):
    result = await service.get_menu_cards(lang, page, limit, cat.value if cat else None)
    return StandardResponse.success(result, get_message("product.retrieved", lang))


@router.get(
    "/detail/{lang}/{short_id}",
    response_model=StandardResponse,
    summary="Product detail by shortId",
    responses={404: {"description": "Product not found."}}
)
async def get_detail(lang: str, short_id: str, service: ProductServiceDep):
    detail = await service.get_product_detail(short_id, lang)
    return StandardResponse.success(detail, get_message("product.retrieved", lang))


@router.get("/admin/raw", response_model=StandardResponse, summary="All products, raw documents")
async def get_all_raw(
    service: ProductServiceDep,
    page: PageQuery = 1,
    limit: LimitQuery = 20,
    cat: CategoryQuery = None,
):
    result = await service.find_all_raw(page, limit, cat.value if cat else None)
    return StandardResponse.success(result, get_message("product.retrieved"))


@router.get("/admin/{product_id}", response_model=StandardResponse, summary="One product, raw document")
async def get_raw(product_id: str, service: ProductServiceDep):
    product = await service.find_raw(product_id)
    return StandardResponse.success(product, get_message("product.retrieved"))


@router.patch("/{product_id}", response_model=StandardResponse, summary="Update a product")
async def update_product(product_id: str, body: ProductUpdate, service: ProductServiceDep):
    product = await service.update(product_id, body.to_document(partial=True))
    return StandardResponse.success(product, get_message("product.updated"))


@router.delete("/{product_id}", response_model=StandardResponse, summary="Delete a product")
async def delete_product(product_id: str, service: ProductServiceDep):
    result = await service.remove(product_id)
    return StandardResponse.success(result, get_message("product.deleted"))


@router.patch(
    "/{product_id}/media",
    response_model=StandardResponse,
    summary="Upload thumbnail and gallery images",
    description="Files are uploaded one by one; the first storage failure stops the batch and the files "
                "already uploaded are kept on the product."
)
async def upload_media(
    product_id: str,
    service: ProductServiceDep,
    thumbnail: Annotated[Optional[UploadFile], File(description="New thumbnail image")] = None,
    gallery: Annotated[Optional[List[UploadFile]], File(description="Images appended to the gallery")] = None,
):
    thumbnail_upload = MediaUpload(thumbnail.filename or "thumbnail", await thumbnail.read()) if thumbnail else None
    gallery_uploads = [MediaUpload(item.filename or "gallery", await item.read()) for item in gallery or []]

    result = await service.upload_media(product_id, thumbnail_upload, gallery_uploads)
    if result["error"]:
        message = get_message("product.media.partial", variables={"uploaded": len(result["uploaded"])})
    else:
        message = get_message("product.media.uploaded")
    return StandardResponse.success(result, message)


@router.patch("/{product_id}/media/reorder", response_model=StandardResponse, summary="Reorder product media")
async def reorder_media(product_id: str, body: MediaOrderUpdate, service: ProductServiceDep):
    product = await service.update_media_order(product_id, body.thumbnail, body.gallery)
    return StandardResponse.success(product, get_message("product.media.reordered"))
