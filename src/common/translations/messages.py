#  common/translations/messages.py
from typing import Dict, Optional

from common.translations.resolver import resolve

MESSAGES = {
    "product.created": {
        "en": "Product created successfully.",
        "bn": "পণ্য সফলভাবে তৈরি হয়েছে।"
    },
    "product.updated": {
        "en": "Product updated successfully.",
        "bn": "পণ্য সফলভাবে হালনাগাদ হয়েছে।"
    },
    "product.deleted": {
        "en": "Product deleted.",
        "bn": "পণ্য মুছে ফেলা হয়েছে।"
    },
    "product.not_found": {
        "en": "Product not found.",
        "bn": "পণ্য পাওয়া যায়নি।"
    },
    "localization.english_required": {
        "en": "English (en) {fields} required.",
        "bn": "ইংরেজি (en) {fields} আবশ্যক।"
    },
    "product.retrieved": {
        "en": "Products retrieved successfully.",
        "bn": "পণ্য তালিকা পাওয়া গেছে।"
    },
    "product.stats": {
        "en": "Product statistics computed.",
        "bn": "পণ্যের পরিসংখ্যান তৈরি হয়েছে।"
    },
    "product.media.uploaded": {
        "en": "Media uploaded successfully.",
        "bn": "মিডিয়া সফলভাবে আপলোড হয়েছে।"
    },
    "product.media.partial": {
        "en": "Media upload stopped after a failure; {uploaded} file(s) saved.",
        "bn": "ত্রুটির কারণে আপলোড থেমেছে; {uploaded} টি ফাইল সংরক্ষিত হয়েছে।"
    },
    "product.media.missing": {
        "en": "No files provided in the request.",
        "bn": "অনুরোধে কোনো ফাইল নেই।"
    },
    "product.media.unknown_url": {
        "en": "URL does not belong to this product: {url}",
        "bn": "এই URL এই পণ্যের নয়: {url}"
    },
    "product.media.reordered": {
        "en": "Media order updated.",
        "bn": "মিডিয়ার ক্রম হালনাগাদ হয়েছে।"
    },
    "faq.created": {
        "en": "FAQ created successfully.",
        "bn": "প্রশ্নোত্তর তৈরি হয়েছে।"
    },
    "faq.updated": {
        "en": "FAQ updated successfully.",
        "bn": "প্রশ্নোত্তর হালনাগাদ হয়েছে।"
    },
    "faq.deleted": {
        "en": "FAQ deleted.",
        "bn": "প্রশ্নোত্তর মুছে ফেলা হয়েছে।"
    },
    "faq.not_found": {
        "en": "FAQ {ref} not found.",
        "bn": "প্রশ্নোত্তর {ref} পাওয়া যায়নি।"
    },
    "faq.retrieved": {
        "en": "FAQs retrieved successfully.",
        "bn": "প্রশ্নোত্তর পাওয়া গেছে।"
    },
    "page.created": {
        "en": "Page created successfully.",
        "bn": "পৃষ্ঠা তৈরি হয়েছে।"
    },
    "page.updated": {
        "en": "Page updated successfully.",
        "bn": "পৃষ্ঠা হালনাগাদ হয়েছে।"
    },
    "page.deleted": {
        "en": "Page deleted.",
        "bn": "পৃষ্ঠা মুছে ফেলা হয়েছে।"
    },
    "page.not_found": {
        "en": "Page \"{key}\" not found.",
        "bn": "\"{key}\" পৃষ্ঠা পাওয়া যায়নি।"
    },
    "page.key_exists": {
        "en": "Page key already exists.",
        "bn": "এই পৃষ্ঠা কী আগেই আছে।"
    },
    "page.retrieved": {
        "en": "Pages retrieved successfully.",
        "bn": "পৃষ্ঠা পাওয়া গেছে।"
    },
    "language.created": {
        "en": "Language created successfully.",
        "bn": "ভাষা যোগ করা হয়েছে।"
    },
    "language.updated": {
        "en": "Language updated successfully.",
        "bn": "ভাষা হালনাগাদ হয়েছে।"
    },
    "language.deleted": {
        "en": "Language deleted.",
        "bn": "ভাষা মুছে ফেলা হয়েছে।"
    },
    "language.not_found": {
        "en": "Language not found.",
        "bn": "ভাষা পাওয়া যায়নি।"
    },
    "language.code_not_found": {
        "en": "Language with code {code} not found.",
        "bn": "{code} কোডের ভাষা পাওয়া যায়নি।"
    },
    "language.code_exists": {
        "en": "Language code already exists.",
        "bn": "এই ভাষার কোড আগেই আছে।"
    },
    "language.retrieved": {
        "en": "Languages retrieved successfully.",
        "bn": "ভাষার তালিকা পাওয়া গেছে।"
    },
    "media.uploaded": {
        "en": "File uploaded successfully.",
        "bn": "ফাইল আপলোড হয়েছে।"
    },
    "media.deleted": {
        "en": "Media deleted.",
        "bn": "মিডিয়া মুছে ফেলা হয়েছে।"
    },
    "media.not_found": {
        "en": "Media record not found.",
        "bn": "মিডিয়া পাওয়া যায়নি।"
    },
    "media.no_file": {
        "en": "No file selected.",
        "bn": "কোনো ফাইল নির্বাচন করা হয়নি।"
    },
    "media.no_source": {
        "en": "URL or Base64 is required.",
        "bn": "URL বা Base64 প্রয়োজন।"
    },
    "media.public_id_exists": {
        "en": "A media record with this public id already exists.",
        "bn": "এই পাবলিক আইডির মিডিয়া আগেই আছে।"
    },
    "media.retrieved": {
        "en": "Media retrieved successfully.",
        "bn": "মিডিয়া পাওয়া গেছে।"
    },
    "storage.failed": {
        "en": "Object storage request failed.",
        "bn": "স্টোরেজ অনুরোধ ব্যর্থ হয়েছে।"
    },
    "rate_limit.exceeded": {
        "en": "Too many requests. Please try again later.",
        "bn": "অনেক বেশি অনুরোধ। পরে আবার চেষ্টা করুন।"
    },
    "server.error": {
        "en": "Server error occurred.",
        "bn": "সার্ভারে ত্রুটি ঘটেছে।"
    },
}


def get_message(key: str, lang: str = "en", variables: Optional[Dict[str, int | str]] = None) -> str:
    """
    Retrieve a localized message based on key and language, with optional variable substitution.

    Args:
        key (str): Message key (e.g., 'product.not_found')
        lang (str): Language code ('en', 'bn', ...). Unknown languages fall back to English.
        variables (Optional[Dict[str, int | str]]): Variables to substitute in the message

    Returns:
        str: Localized message or key as fallback
    """
    message = resolve(MESSAGES.get(key), lang) or key
    if variables:
        try:
            return message.format(**variables)
        except (KeyError, ValueError):
            return message
    return message
