"""Tests for the FAQ service."""

import re

import pytest

from common.exceptions.base_exception import BadRequestException, NotFoundException
from domain.faq.services.faq_service import transform_faq


def faq_payload(**overrides) -> dict:
    payload = {
        "question": {"en": "Do you deliver?", "bn": "আপনারা কি ডেলিভারি দেন?"},
        "answer": {"en": "Yes, within Dhaka.", "bn": "হ্যাঁ, ঢাকার মধ্যে।"},
        "position": 2,
    }
    payload.update(overrides)
    return payload


class TestFaqShortIdLifecycle:
    async def test_create_issues_short_id(self, faq_service) -> None:
        faq = await faq_service.create(faq_payload())
        assert re.fullmatch(r"faq--2--[A-Za-z0-9]{6}", faq["shortId"])
        assert faq["hide"] is False

    async def test_missing_position_defaults_to_zero(self, faq_service) -> None:
        faq = await faq_service.create(faq_payload(position=None))
        assert faq["position"] == 0
        assert faq["shortId"].startswith("faq--0--")

    async def test_content_edit_keeps_short_id(self, faq_service) -> None:
        faq = await faq_service.create(faq_payload())

        updated = await faq_service.update(faq["_id"], {"answer": {"en": "Only on weekends."}, "position": 2})

        assert updated["shortId"] == faq["shortId"]

    async def test_position_change_issues_new_short_id(self, faq_service) -> None:
        faq = await faq_service.create(faq_payload())

        updated = await faq_service.update(faq["_id"], {"position": 5})

        assert updated["shortId"] != faq["shortId"]
        assert updated["shortId"].startswith("faq--5--")
        with pytest.raises(NotFoundException):
            await faq_service.find_by_short_id(faq["shortId"])

    async def test_client_cannot_set_short_id(self, faq_service) -> None:
        faq = await faq_service.create(faq_payload())
        updated = await faq_service.update(faq["_id"], {"shortId": "faq--2--hacked", "link": "/menu"})
        assert updated["shortId"] == faq["shortId"]
        assert updated["link"] == "/menu"


class TestFaqReads:
    async def test_public_list_hides_hidden_and_resolves(self, faq_service) -> None:
        await faq_service.create(faq_payload(position=2))
        await faq_service.create(faq_payload(position=1, question={"en": "Opening hours?"}))
        await faq_service.create(faq_payload(position=3, hide=True))

        faqs = await faq_service.find_all_by_lang("bn")

        assert [faq["position"] for faq in faqs] == [1, 2]
        assert faqs[0]["question"] == "Opening hours?"
        assert faqs[1]["question"] == "আপনারা কি ডেলিভারি দেন?"
        assert len(await faq_service.find_all()) == 3

    async def test_hidden_faq_is_not_found_publicly(self, faq_service) -> None:
        faq = await faq_service.create(faq_payload(hide=True))

        with pytest.raises(NotFoundException):
            await faq_service.find_one_by_lang(faq["_id"], "en")
        with pytest.raises(NotFoundException):
            await faq_service.find_one_by_lang_by_short_id("en", faq["shortId"])
        assert (await faq_service.find_one(faq["_id"]))["hide"] is True

    async def test_lookup_by_short_id(self, faq_service) -> None:
        faq = await faq_service.create(faq_payload())
        found = await faq_service.find_one_by_lang_by_short_id("en", faq["shortId"])
        assert found["answer"] == "Yes, within Dhaka."

    async def test_english_is_required(self, faq_service) -> None:
        with pytest.raises(BadRequestException):
            await faq_service.create(faq_payload(answer={"bn": "হ্যাঁ"}))

    async def test_remove(self, faq_service) -> None:
        faq = await faq_service.create(faq_payload())
        assert await faq_service.remove(faq["_id"]) == {"deleted": True}
        with pytest.raises(NotFoundException):
            await faq_service.remove(faq["_id"])


class TestTransform:
    def test_legacy_record_gets_placeholder_short_id(self) -> None:
        transformed = transform_faq({"_id": "abc", "position": 4, "question": {"en": "Q"}}, "bn")
        assert transformed["shortId"] == "faq--4--legacy"
        assert transformed["question"] == "Q"
        assert transformed["answer"] == ""
        assert transformed["link"] == ""
