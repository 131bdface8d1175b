import re
import html
import unicodedata
from typing import Any, Optional

from bakery.core.exceptions import ValidationError


def sanitize_string(value: Optional[str], max_length: int = 1000) -> Optional[str]:
    """Sanitize free text input to prevent XSS attacks."""
    if value is None:
        return None

    value = value.strip()

    if len(value) > max_length:
        value = value[:max_length]

    return html.escape(value)


def slugify(value: str) -> str:
    """
    Build a URL-friendly slug: accents stripped, lowercase, hyphen separated.

    "Bolo de Aniversário" -> "bolo-de-aniversario"
    """
    normalized = unicodedata.normalize("NFD", value or "")
    ascii_only = "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")
    slug = re.sub(r"[^a-z0-9 -]", "", ascii_only.lower().strip())
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"-+", "-", slug).strip("-")


def coerce_text(value: Any, field: str) -> str:
    """Strip a free-text field; None becomes '' and non-strings are rejected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text")
    return value.strip()


def sanitize_filename(filename: Optional[str]) -> str:
    """Keep only safe characters of an uploaded file name; whitespace becomes '_'."""
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = re.sub(r"\s+", "_", name.strip())
    name = re.sub(r"[^A-Za-z0-9._-]", "", name).lstrip(".")
    return name or "image"


def coerce_price(value: Any) -> float:
    """
    Normalize a price to a float.

    Form transports deliver prices as text, possibly with a decimal comma.
    """
    if isinstance(value, bool):
        raise ValidationError("Price must be a number")
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Price must be a number")
    if price != price or price < 0:  # NaN or negative
        raise ValidationError("Price must be a non-negative number")
    return round(price, 2)


def coerce_bool(value: Any) -> bool:
    """Accept real booleans and the 'true'/'false' strings sent by HTML forms."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "on", "yes")
    return bool(value)


def validate_phone(value: Optional[str]) -> str:
    """Validate a customer phone number and return its digits."""
    digits = re.sub(r"\D", "", value or "")
    if len(digits) < 8 or len(digits) > 15:
        raise ValidationError("A valid customer phone number is required")
    return digits


def validate_email_format(email: str) -> bool:
    """Validate email format with strict pattern."""
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email)) and len(email) <= 254
