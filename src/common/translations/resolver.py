# File: common/translations/resolver.py
"""
Resolution of multilingual fields.

A multilingual field is a plain mapping of language code to value, e.g.
``{"en": "Milk Tea", "bn": "দুধ চা"}``. The ``en`` entry is mandatory when a
document is created and is the fallback for every other language. Legacy or
partial records may lack a field entirely; resolution then degrades to an
empty value instead of raising.
"""

from typing import Any, Dict, List, Mapping, Optional

FALLBACK_LANGUAGE = "en"

MultilingualText = Dict[str, str]


def resolve(field: Optional[Mapping[str, Any]], lang: str) -> str:
    """
    Return the ``lang`` variant of a field, else its English variant, else "".

    Empty strings and non-string values count as missing.
    """
    if not isinstance(field, Mapping):
        return ""

    value = field.get(lang)
    if isinstance(value, str) and value:
        return value

    fallback = field.get(FALLBACK_LANGUAGE)
    if isinstance(fallback, str) and fallback:
        return fallback
    return ""


def resolve_list(field: Optional[Mapping[str, Any]], lang: str) -> List[str]:
    """Same fallback rule for language-keyed lists (e.g. SEO keywords)."""
    if not isinstance(field, Mapping):
        return []

    for code in (lang, FALLBACK_LANGUAGE):
        value = field.get(code)
        if isinstance(value, (list, tuple)) and value:
            return [str(item) for item in value]
    return []


def resolve_labels(content: Optional[Mapping[str, Any]], lang: str) -> Dict[str, str]:
    """Resolve every label of an open-ended ``label -> MultilingualText`` map."""
    if not isinstance(content, Mapping):
        return {}
    return {label: resolve(text, lang) for label, text in content.items()}


def missing_english(document: Mapping[str, Any], fields) -> List[str]:
    """Names of ``fields`` whose English variant is absent or blank."""
    missing = []
    for name in fields:
        text = document.get(name)
        english = text.get(FALLBACK_LANGUAGE) if isinstance(text, Mapping) else None
        if not isinstance(english, str) or not english.strip():
            missing.append(name)
    return missing
