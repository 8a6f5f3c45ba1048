from typing import Annotated, Any, Dict, List, Sequence
from pydantic import StringConstraints

# Rejects missing, empty and whitespace-only strings
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Client-facing message per request field, whatever the pydantic error type
FIELD_MESSAGES = {
    "name": "Name is required",
    "email": "Please include a valid email",
    "password": "Password is required",
    "text": "Text is required",
    "status": "Status is required",
    "skills": "Skills is required",
    "title": "Title is required",
    "company": "Company is required",
    "school": "School is required",
    "degree": "Degree is required",
    "fieldofstudy": "Field of study is required",
    "from": "From date is required",
}

# Overrides for a specific (field, pydantic error type) pair
TYPED_FIELD_MESSAGES = {
    ("password", "string_too_short"): "Please enter a password with 6 or more characters",
}


def _field_name(loc: Sequence[Any]) -> str | None:
    # loc looks like ("body", "skills", "str") or ("path", "post_id")
    if len(loc) >= 2:
        return str(loc[1])
    return None


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Turn pydantic/FastAPI validation errors into [{"msg", "param"}] entries.

    One entry per field, in the order the fields failed.
    """
    formatted: List[Dict[str, Any]] = []
    seen = set()
    for error in errors:
        field = _field_name(error.get("loc", ()))
        if field in seen:
            continue
        seen.add(field)

        message = TYPED_FIELD_MESSAGES.get((field, error.get("type"))) \
            or FIELD_MESSAGES.get(field) \
            or error.get("msg", "Invalid value")
        entry: Dict[str, Any] = {"msg": message}
        if field:
            entry["param"] = field
        formatted.append(entry)
    return formatted
