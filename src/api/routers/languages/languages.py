# File: src/api/routers/languages/languages.py

from fastapi import APIRouter, status

from api.dependencies import LanguageServiceDep
from common.schemas.standard_response import StandardResponse
from common.translations.messages import get_message
from domain.languages.entities.language_entity import LanguageCreate, LanguageUpdate

router = APIRouter(prefix="/languages", tags=["Languages"])


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Register a language",
    responses={409: {"description": "Language code already exists."}}
)
async def create_language(body: LanguageCreate, service: LanguageServiceDep):
    language = await service.create(body.to_document())
    return StandardResponse.success(language, get_message("language.created"), 201)


@router.get("/", response_model=StandardResponse, summary="All languages sorted by label")
async def get_all(service: LanguageServiceDep):
    return StandardResponse.success(await service.find_all(), get_message("language.retrieved"))


@router.get("/code/{code}", response_model=StandardResponse, summary="Language by code")
async def get_by_code(code: str, service: LanguageServiceDep):
    return StandardResponse.success(await service.find_by_code(code), get_message("language.retrieved"))


@router.get("/country/{country_code}", response_model=StandardResponse, summary="Languages of one country")
async def get_by_country(country_code: str, service: LanguageServiceDep):
    return StandardResponse.success(await service.find_by_country(country_code), get_message("language.retrieved"))


@router.get("/{language_id}", response_model=StandardResponse, summary="Language by id")
async def get_one(language_id: str, service: LanguageServiceDep):
    return StandardResponse.success(await service.find_one(language_id), get_message("language.retrieved"))


@router.patch("/{language_id}", response_model=StandardResponse, summary="Update a language")
async def update_language(language_id: str, body: LanguageUpdate, service: LanguageServiceDep):
    language = await service.update(language_id, body.to_document(partial=True))
    return StandardResponse.success(language, get_message("language.updated"))


@router.delete("/{language_id}", response_model=StandardResponse, summary="Delete a language")
async def delete_language(language_id: str, service: LanguageServiceDep):
    return StandardResponse.success(await service.remove(language_id), get_message("language.deleted"))
