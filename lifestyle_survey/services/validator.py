from __future__ import annotations
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from email_validator import EmailNotValidError

from ..config import MIN_AGE, MAX_AGE
from ..schemas import ErrorCode, FieldError, FoodChoice, Ratings, SurveyRecord, ValidationResult
from .ages import compute_age
from .emails import canonical_email

NAME_MIN, NAME_MAX = 2, 50
CONTACT_LEN = 10
RATING_MIN, RATING_MAX = 1, 5

# (record attribute, wire key, message when missing), in form order
RATING_FIELDS = (
    ("eat_out", "eatOut", "Eating out rating is required"),
    ("watch_movies", "watchMovies", "Movies rating is required"),
    ("watch_tv", "watchTV", "TV rating is required"),
    ("listen_radio", "listenRadio", "Radio rating is required"),
)

_DIGITS = re.compile(r"[0-9]+")
# leading zeros aside, a rating never needs more than three digits
_INT = re.compile(r"([+-]?)0*([0-9]{1,3})")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""

def _contact_text(value: Any) -> str | None:
    """Phone numbers may arrive as JSON numbers. None means too many digits to be one."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value) if abs(value) < 10 ** CONTACT_LEN else None
    return _text(value)


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    s = value.strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None

def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    m = _INT.fullmatch(value.strip()) if isinstance(value, str) else None
    if m:
        return -int(m.group(2)) if m.group(1) == "-" else int(m.group(2))
    return None

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate(candidate: Mapping[str, Any], today: date) -> ValidationResult:
    """
    Check one submitted survey (camelCase wire shape) against every field rule.

    Every field is checked even after an earlier one fails, so the caller gets
    the complete list of problems in one pass. Within a field, a missing value
    is reported alone; the remaining checks for that field are all reported.
    Never raises for bad input.
    """
    if not isinstance(candidate, Mapping):
        candidate = {}
    errors: list[FieldError] = []

    def fail(field: str, code: ErrorCode, message: str) -> None:
        errors.append(FieldError(field=field, code=code, message=message))

    full_name = _text(candidate.get("fullName"))
    if not full_name:
        fail("fullName", ErrorCode.REQUIRED_FIELD, "Full name is required")
    elif not NAME_MIN <= len(full_name) <= NAME_MAX:
        fail("fullName", ErrorCode.LENGTH_OUT_OF_RANGE,
             f"Name must be between {NAME_MIN}-{NAME_MAX} characters")

    email = _text(candidate.get("email"))
    if not email:
        fail("email", ErrorCode.REQUIRED_FIELD, "Email is required")
    else:
        try:
            email = canonical_email(email)
        except EmailNotValidError:
            fail("email", ErrorCode.INVALID_FORMAT, "Please enter a valid email")

    contact = _contact_text(candidate.get("contactNumber"))
    if contact is None:
        fail("contactNumber", ErrorCode.LENGTH_MISMATCH,
             f"Contact number must be {CONTACT_LEN} digits")
    elif not contact:
        fail("contactNumber", ErrorCode.REQUIRED_FIELD, "Contact number is required")
    else:
        if len(contact) != CONTACT_LEN:
            fail("contactNumber", ErrorCode.LENGTH_MISMATCH,
                 f"Contact number must be {CONTACT_LEN} digits")
        if not _DIGITS.fullmatch(contact):
            fail("contactNumber", ErrorCode.NON_NUMERIC, "Contact number must contain only numbers")

    raw_dob = candidate.get("dateOfBirth")
    born = None
    if _is_blank(raw_dob):
        fail("dateOfBirth", ErrorCode.REQUIRED_FIELD, "Date of birth is required")
    else:
        born = _parse_date(raw_dob)
        if born is None:
            fail("dateOfBirth", ErrorCode.INVALID_FORMAT, "Please use a valid date format (YYYY-MM-DD)")
        elif not MIN_AGE <= compute_age(born, today) <= MAX_AGE:
            fail("dateOfBirth", ErrorCode.OUT_OF_RANGE,
                 f"Age must be between {MIN_AGE} and {MAX_AGE} years")

    raw_foods = candidate.get("favoriteFoods")
    foods: tuple[FoodChoice, ...] = ()
    if not isinstance(raw_foods, (list, tuple)):
        fail("favoriteFoods", ErrorCode.REQUIRED_FIELD, "Please select at least one favorite food")
    elif not raw_foods:
        fail("favoriteFoods", ErrorCode.EMPTY_COLLECTION, "Please select at least one favorite food")
    else:
        try:
            foods = tuple(FoodChoice(f) for f in raw_foods)
        except (ValueError, TypeError):
            fail("favoriteFoods", ErrorCode.INVALID_VALUE, "Invalid food selection")

    raw_ratings = candidate.get("ratings")
    if not isinstance(raw_ratings, Mapping):
        raw_ratings = {}
    scores: dict[str, int] = {}
    for attr, key, required_msg in RATING_FIELDS:
        value = raw_ratings.get(key)
        if _is_blank(value):
            fail(f"ratings.{key}", ErrorCode.REQUIRED_FIELD, required_msg)
            continue
        n = _as_int(value)
        if n is None or not RATING_MIN <= n <= RATING_MAX:
            fail(f"ratings.{key}", ErrorCode.OUT_OF_RANGE,
                 f"Rating must be between {RATING_MIN}-{RATING_MAX}")
            continue
        scores[attr] = n

    if errors:
        return ValidationResult(errors=errors)

    record = SurveyRecord(
        full_name=full_name,
        email=email,
        contact_number=contact,
        date_of_birth=born,
        favorite_foods=foods,
        ratings=Ratings(**scores),
    )
    return ValidationResult(record=record)
