"""
Best-effort JSON extraction from free-text model output.

Models wrap their answer in ```json fences, prepend chatter, or append
notes after the array. We strip fences, cut from the first '[' to the
last ']', and hand what is left to json.loads. Anything that does not
come out as a list is treated as "no answer".
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from leads.models import Profile

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "username", "instagram_url")


def strip_fences(text: str) -> str:
    return text.replace("```json", "").replace("```", "")


def extract_json_array(text: str | None) -> list[Any] | None:
    if not text:
        return None

    cleaned = strip_fences(text.strip())

    first = cleaned.find("[")
    last  = cleaned.rfind("]")
    if first != -1 and last != -1:
        cleaned = cleaned[first:last + 1]

    try:
        data = json.loads(cleaned)
    except (ValueError, RecursionError) as exc:
        log.debug("Unparseable model output (%s): %.120r", exc, text)
        return None

    if not isinstance(data, list):
        return None
    return data


def has_required_fields(item: Any) -> bool:
    return isinstance(item, dict) and all(
        item.get(f) is not None and str(item[f]).strip() for f in REQUIRED_FIELDS
    )


def parse_profiles(text: str | None) -> list[Profile]:
    """Extract the array and keep only items that look like a profile."""
    items = extract_json_array(text)
    if items is None:
        return []

    profiles = []
    for item in items:
        if not has_required_fields(item):
            continue
        try:
            profiles.append(Profile.model_validate(item))
        except ValidationError as exc:
            log.debug("Dropping malformed profile %r: %s", item, exc)
    return profiles
