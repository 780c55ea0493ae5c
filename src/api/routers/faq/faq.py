# File: src/api/routers/faq/faq.py

from fastapi import APIRouter, status

from api.dependencies import FaqServiceDep
from common.schemas.standard_response import StandardResponse
from common.translations.messages import get_message
from domain.faq.entities.faq_entity import FaqCreate, FaqUpdate

router = APIRouter(prefix="/faq", tags=["FAQ"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=StandardResponse, summary="Create an FAQ entry")
async def create_faq(body: FaqCreate, service: FaqServiceDep):
    faq = await service.create(body.to_document())
    return StandardResponse.success(faq, get_message("faq.created"), 201)


@router.get("/", response_model=StandardResponse, summary="All FAQ entries, raw")
async def get_all(service: FaqServiceDep):
    return StandardResponse.success(await service.find_all(), get_message("faq.retrieved"))


@router.get("/lang/{lang}", response_model=StandardResponse, summary="Visible FAQ entries for one language")
async def get_all_by_lang(lang: str, service: FaqServiceDep):
    return StandardResponse.success(await service.find_all_by_lang(lang), get_message("faq.retrieved", lang))


@router.get("/lang/{lang}/shortid/{short_id}", response_model=StandardResponse, summary="Visible FAQ entry by shortId")
async def get_one_by_lang_by_short_id(lang: str, short_id: str, service: FaqServiceDep):
    faq = await service.find_one_by_lang_by_short_id(lang, short_id)
    return StandardResponse.success(faq, get_message("faq.retrieved", lang))


@router.get("/lang/{lang}/{faq_id}", response_model=StandardResponse, summary="Visible FAQ entry by id")
async def get_one_by_lang(lang: str, faq_id: str, service: FaqServiceDep):
    faq = await service.find_one_by_lang(faq_id, lang)
    return StandardResponse.success(faq, get_message("faq.retrieved", lang))


@router.get("/shortid/{short_id}", response_model=StandardResponse, summary="FAQ entry by shortId, raw")
async def get_by_short_id(short_id: str, service: FaqServiceDep):
    return StandardResponse.success(await service.find_by_short_id(short_id), get_message("faq.retrieved"))


@router.get("/{faq_id}", response_model=StandardResponse, summary="FAQ entry by id, raw")
async def get_one(faq_id: str, service: FaqServiceDep):
    return StandardResponse.success(await service.find_one(faq_id), get_message("faq.retrieved"))


@router.patch(
    "/{faq_id}",
    response_model=StandardResponse,
    summary="Update an FAQ entry",
    description="Changing the position issues a new shortId."
)
async def update_faq(faq_id: str, body: FaqUpdate, service: FaqServiceDep):
    faq = await service.update(faq_id, body.to_document(partial=True))
    return StandardResponse.success(faq, get_message("faq.updated"))


@router.delete("/{faq_id}", response_model=StandardResponse, summary="Delete an FAQ entry")
async def delete_faq(faq_id: str, service: FaqServiceDep):
    return StandardResponse.success(await service.remove(faq_id), get_message("faq.deleted"))
