# File: src/api/routers/media/media.py

from typing import Annotated, Optional

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from api.dependencies import MediaServiceDep
from common.exceptions.base_exception import BadRequestException
from common.schemas.standard_response import StandardResponse
from common.translations.messages import get_message
from domain.media.entities.media_entity import MediaPurpose, RemoteUpload

router = APIRouter(prefix="/media", tags=["Media"])

PurposeQuery = Annotated[Optional[MediaPurpose], Query(description="Restrict to one purpose")]


@router.post(
    "/upload-file",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Upload a file to object storage",
    responses={400: {"description": "No file selected."}, 502: {"description": "Object storage failed."}}
)
async def upload_file(
    service: MediaServiceDep,
    file: Annotated[Optional[UploadFile], File()] = None,
    purpose: Annotated[MediaPurpose, Form()] = MediaPurpose.GENERAL,
    ref_id: Annotated[Optional[str], Form(alias="refId")] = None,
):
    if file is None:
        raise BadRequestException(get_message("media.no_file"))
    content = await file.read()
    if not content:
        raise BadRequestException(get_message("media.no_file"))

    media = await service.upload_file(content, file.filename or "upload", purpose, ref_id)
    return StandardResponse.success(media, get_message("media.uploaded"), 201)


@router.post(
    "/upload-link",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Upload from a URL or Base64 data URI"
)
async def upload_link(body: RemoteUpload, service: MediaServiceDep):
    media = await service.upload_remote(body.url, body.purpose, body.name, body.ref_id)
    return StandardResponse.success(media, get_message("media.uploaded"), 201)


@router.get("/", response_model=StandardResponse, summary="Paginated media, newest first")
async def get_all(
    service: MediaServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    purpose: PurposeQuery = None,
):
    return StandardResponse.success(await service.find_all(page, limit, purpose), get_message("media.retrieved"))


@router.get("/raw", response_model=StandardResponse, summary="All media, newest first")
async def get_all_raw(service: MediaServiceDep, purpose: PurposeQuery = None):
    return StandardResponse.success(await service.find_all_raw(purpose), get_message("media.retrieved"))


@router.get("/count", response_model=StandardResponse, summary="Count media records")
async def get_count(service: MediaServiceDep, purpose: PurposeQuery = None):
    return StandardResponse.success(await service.get_count(purpose), get_message("media.retrieved"))


@router.get("/ref/{ref_id}", response_model=StandardResponse, summary="Media attached to one entity")
async def get_by_ref(ref_id: str, service: MediaServiceDep):
    return StandardResponse.success(await service.find_by_ref_id(ref_id), get_message("media.retrieved"))


@router.get("/{media_id}", response_model=StandardResponse, summary="Media record by id")
async def get_one(media_id: str, service: MediaServiceDep):
    return StandardResponse.success(await service.find_by_id(media_id), get_message("media.retrieved"))


@router.delete("/{media_id}", response_model=StandardResponse, summary="Delete media from storage and database")
async def delete_media(media_id: str, service: MediaServiceDep):
    return StandardResponse.success(await service.delete(media_id), get_message("media.deleted"))
