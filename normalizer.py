"""
Identity keys used to compare people across the candidate and prospect tables.

Every function here is pure and never raises: a missing or unusable value
yields an empty string, which callers treat as "no key" and skip.
"""
import re
import unicodedata
from typing import Optional


def email_key(email: Optional[str]) -> str:
    """Lowercased, trimmed email address"""
    if not email:
        return ""
    return email.strip().lower()


def phone_key(phone: Optional[str]) -> str:
    """Digits only, so '514-123-4567' and '(514) 123 4567' compare equal"""
    if not phone:
        return ""
    return re.sub(r'\D', '', phone)


def strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def name_key(first_name: Optional[str], last_name: Optional[str]) -> str:
    """
    Full-name key for spotting the same person entered twice.

    'Élise  O'Brien' and 'elise obrien' produce the same key.
    """
    full_name = f"{first_name or ''} {last_name or ''}".lower()
    full_name = strip_accents(full_name)
    full_name = re.sub(r'[^a-z\s]', '', full_name)
    return re.sub(r'\s+', ' ', full_name).strip()
