"""
Profile field validation, run before any write to the users table
"""
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from dating_app.core.exceptions import ValidationError

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_.]+$')
USERNAME_MIN, USERNAME_MAX = 3, 30
PROFILE_NAME_MIN, PROFILE_NAME_MAX = 3, 50
BIO_MAX = 500
COUNTRY_MAX = 50
PASSWORD_MIN = 6
MAX_SWIPE_IMAGES = 3
REGISTRATION_SWIPE_IMAGES = 3

REQUIRED_REGISTRATION_FIELDS = (
    "profile_pic", "profile_name", "username", "country", "password", "swipe_images",
)


def normalize_username(username: str) -> str:
    return username.strip().lower()


def validate_username(username: str) -> Tuple[bool, str]:
    """
    Validate username format

    Returns:
        Tuple of (is_valid, error_message)
    """
    if len(username) < USERNAME_MIN:
        return False, f"Username must be at least {USERNAME_MIN} characters long"
    if len(username) > USERNAME_MAX:
        return False, f"Username cannot exceed {USERNAME_MAX} characters"
    if not USERNAME_PATTERN.match(username):
        return False, "Username can only contain letters, numbers, underscores, or dots"
    return True, ""


def validate_profile_name(profile_name: str) -> Tuple[bool, str]:
    name = profile_name.strip()
    if len(name) < PROFILE_NAME_MIN:
        return False, f"Profile name must be at least {PROFILE_NAME_MIN} characters long"
    if len(name) > PROFILE_NAME_MAX:
        return False, f"Profile name cannot exceed {PROFILE_NAME_MAX} characters"
    return True, ""


def validate_bio(bio: str) -> Tuple[bool, str]:
    if len(bio.strip()) > BIO_MAX:
        return False, f"Bio cannot exceed {BIO_MAX} characters"
    return True, ""


def validate_country(country: str) -> Tuple[bool, str]:
    name = country.strip()
    if not name:
        return False, "Country is required"
    if len(name) > COUNTRY_MAX:
        return False, f"Country name cannot exceed {COUNTRY_MAX} characters"
    return True, ""


def validate_password(password: str) -> Tuple[bool, str]:
    if len(password) < PASSWORD_MIN:
        return False, f"Password must be at least {PASSWORD_MIN} characters long"
    return True, ""


def validate_profile_pic(profile_pic: str) -> Tuple[bool, str]:
    if not profile_pic.strip():
        return False, "Profile picture is required"
    return True, ""


def validate_swipe_images(images: List[str], exact: Optional[int] = None) -> Tuple[bool, str]:
    if exact is not None and len(images) != exact:
        return False, f"Please provide exactly {exact} swipe images."
    if len(images) > MAX_SWIPE_IMAGES:
        return False, f"{len(images)} swipe images provided, but max {MAX_SWIPE_IMAGES} are allowed!"
    if any(not isinstance(url, str) or not url.strip() for url in images):
        return False, "Swipe images must be non-empty image URLs."
    return True, ""


_FIELD_VALIDATORS: Dict[str, Callable[[Any], Tuple[bool, str]]] = {
    "username": validate_username,
    "profile_name": validate_profile_name,
    "bio": validate_bio,
    "country": validate_country,
    "password": validate_password,
    "profile_pic": validate_profile_pic,
    "swipe_images": validate_swipe_images,
}


def _collect_errors(data: Dict[str, Any], fields: Iterable[str]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for field in fields:
        value = data.get(field)
        if value is None or field not in _FIELD_VALIDATORS:
            continue
        is_valid, error_msg = _FIELD_VALIDATORS[field](value)
        if not is_valid:
            errors[field] = error_msg
    return errors


def validate_registration(data: Dict[str, Any]) -> None:
    """
    Validate a registration payload.

    Raises:
        ValidationError: With one message per offending field
    """
    missing = [
        field for field in REQUIRED_REGISTRATION_FIELDS
        if data.get(field) in (None, "", [])
    ]
    if missing:
        raise ValidationError(
            "Please enter all required fields: " + ", ".join(REQUIRED_REGISTRATION_FIELDS) + ".",
            errors={field: "This field is required" for field in missing},
        )

    errors = _collect_errors(data, _FIELD_VALIDATORS.keys())
    is_valid, error_msg = validate_swipe_images(data["swipe_images"], exact=REGISTRATION_SWIPE_IMAGES)
    if not is_valid:
        errors["swipe_images"] = error_msg
    if errors:
        raise ValidationError(errors=errors)


def validate_profile_update(data: Dict[str, Any]) -> None:
    """
    Validate the fields present in a partial profile update.

    Raises:
        ValidationError: With one message per offending field
    """
    errors = _collect_errors(data, data.keys())
    for field in ("profile_name", "country", "profile_pic", "swipe_images"):
        if field in data and data[field] is None:
            errors[field] = f"{field} cannot be empty"
    if errors:
        raise ValidationError(errors=errors)
