# File: domain/identifiers/short_id.py
"""
Human-readable public identifiers ("shortId").

Products:  ``{category}--{position:02}--{slug(title.en)}``, e.g. ``tea--03--hot-milk-tea``.
FAQs:      ``faq--{position}--{6 random alphanumerics}``.

Neither form is checked for uniqueness here; the owning collection carries a
unique index and the repository reports a clash as a conflict.
"""

from common.utils.string_utils import slugify, generate_random_string

FAQ_PREFIX = "faq"
FAQ_SUFFIX_LENGTH = 6


def generate_short_id(category: str, position: int, title_en: str) -> str:
    padded_position = str(int(position)).zfill(2)
    return f"{category}--{padded_position}--{slugify(title_en)}"


def generate_faq_short_id(position: int) -> str:
    return f"{FAQ_PREFIX}--{int(position)}--{generate_random_string(FAQ_SUFFIX_LENGTH)}"


def legacy_faq_short_id(position: int) -> str:
    """Stand-in served for FAQs stored before shortIds existed."""
    return f"{FAQ_PREFIX}--{position}--legacy"
