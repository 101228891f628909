# idcard_api/schemas/validators.py
"""Field rules shared by the roster schemas and the bulk importer."""
import re
from typing import Optional

MOBILE_RE = re.compile(r"^\d{10}$")
AADHAAR_RE = re.compile(r"^\d{12}$")
PHOTO_URL_RE = re.compile(r"^https?://.+\.(jpg|jpeg|png|gif)$", re.IGNORECASE)


def check_mobile(value: Optional[str]) -> Optional[str]:
    if value is not None and not MOBILE_RE.match(value):
        raise ValueError("Mobile number must be 10 digits")
    return value


def check_aadhaar(value: Optional[str]) -> Optional[str]:
    if value in (None, ""):
        return None
    if not AADHAAR_RE.match(value):
        raise ValueError("Aadhaar number must be 12 digits")
    return value


def check_photo_url(value: Optional[str]) -> Optional[str]:
    if value in (None, ""):
        return None
    if not PHOTO_URL_RE.match(value):
        raise ValueError("Photo URL must be a valid image URL (jpg, jpeg, png, gif)")
    return value
