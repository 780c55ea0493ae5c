# File: domain/products/services/projection.py
"""
Language-specific views of a stored product.

``to_card`` is the compact list-view shape, ``to_detail`` the full single-item
shape. Both work on raw documents (camelCase keys) and never raise for
missing translations or missing optional sub-objects.
"""

from typing import Any, Dict

from common.translations.resolver import FALLBACK_LANGUAGE, resolve

UNIT_LABELS = {
    "en": {"c": "Cup", "g": "Glass"},
    "bn": {"c": "কাপ", "g": "গ্লাস"},
}

IN_STOCK = "In Stock"
OUT_OF_STOCK = "Out of Stock"


def unit_label(u_key: Any, lang: str) -> str:
    labels = UNIT_LABELS.get(lang) or UNIT_LABELS[FALLBACK_LANGUAGE]
    return labels["c"] if u_key == "c" else labels["g"]


def to_card(doc: Dict[str, Any], lang: str) -> Dict[str, Any]:
    logistics = doc.get("logistics") or {}
    media = doc.get("media") or {}

    return {
        "shortId": doc.get("shortId", ""),
        "category": doc.get("category", ""),
        "tags": list(doc.get("tags") or []),
        "title": resolve(doc.get("title"), lang),
        "price": logistics.get("grandTotal", 0),
        "unit": unit_label(logistics.get("uKey"), lang),
        "thumbnail": media.get("thumbnail") or "",
    }


def to_detail(doc: Dict[str, Any], lang: str) -> Dict[str, Any]:
    logistics = doc.get("logistics") or {}
    media = doc.get("media") or {}

    detail = to_card(doc, lang)
    detail.update({
        "description": resolve(doc.get("description"), lang),
        "calories": f"{logistics.get('calories') or 0} kcal",
        "media": {
            "thumbnail": media.get("thumbnail") or "",
            "gallery": list(media.get("gallery") or []),
        },
        "details": {
            "ingredients": resolve(doc.get("ingredients"), lang),
            "benefit": resolve(doc.get("healthBenefit"), lang),
            "origin": resolve(doc.get("origin"), lang),
            "fact": resolve(doc.get("funFact"), lang),
        },
        "stockStatus": IN_STOCK if (logistics.get("stock") or 0) > 0 else OUT_OF_STOCK,
        "updatedAt": doc.get("updatedAt"),
    })
    return detail
