"""
Text normalization utilities for consistent data processing
"""
import re
from typing import Optional


COUNTRY_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")


def slugify(name: str) -> str:
    """
    Derive a URL slug from a name:
    - Convert to lowercase
    - Replace every non-alphanumeric character with a hyphen
    - Collapse repeated hyphens
    - Trim leading/trailing hyphens
    """
    slug = re.sub(r"[^a-z0-9]", "-", name.lower())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def normalize_country_code(code: Optional[str]) -> Optional[str]:
    """Uppercase a country code; blank input becomes None"""
    if code is None:
        return None
    code = code.strip().upper()
    return code or None


def is_valid_country_code(code: str) -> bool:
    return bool(COUNTRY_CODE_PATTERN.fullmatch(code))


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; blank input becomes None"""
    if value is None:
        return None
    value = value.strip()
    return value or None
