"""Tests for shortId generation."""

import re

from common.utils.string_utils import slugify
from domain.identifiers.short_id import generate_faq_short_id, generate_short_id, legacy_faq_short_id


class TestProductShortId:
    def test_pads_single_digit_position(self) -> None:
        assert generate_short_id("tea", 3, "Hot Milk Tea") == "tea--03--hot-milk-tea"

    def test_keeps_two_digit_position(self) -> None:
        assert generate_short_id("tea", 12, "Masala Chai!") == "tea--12--masala-chai"

    def test_three_digit_position_is_not_truncated(self) -> None:
        assert generate_short_id("coffee", 105, "Latte") == "coffee--105--latte"

    def test_is_deterministic(self) -> None:
        assert generate_short_id("snacks", 1, "Singara") == generate_short_id("snacks", 1, "Singara")


class TestSlugify:
    def test_transliterates_accents(self) -> None:
        assert slugify("Café Crème") == "cafe-creme"

    def test_collapses_separators(self) -> None:
        assert slugify("  Lemon -- Tea  Special ") == "lemon-tea-special"

    def test_non_latin_title_gives_empty_slug(self) -> None:
        assert slugify("দুধ চা") == ""


class TestFaqShortId:
    def test_format(self) -> None:
        assert re.fullmatch(r"faq--4--[A-Za-z0-9]{6}", generate_faq_short_id(4))

    def test_random_suffix_differs_between_calls(self) -> None:
        generated = {generate_faq_short_id(1) for _ in range(20)}
        assert len(generated) > 1

    def test_legacy_fallback(self) -> None:
        assert legacy_faq_short_id(7) == "faq--7--legacy"
