"""
Lead search: fan a keyword out into query variations, run one model batch
per variation concurrently, then merge and deduplicate by handle.

Batch failures are absorbed (the batch just contributes nothing). Only
the aggregate outcome is surfaced:
    - nothing survived the merge      → NoProfilesFoundError
    - provider said 429 / quota       → RateLimitedError
    - anything else unexpected        → re-raised as is

Public API:
    normalize_username(raw) → str
    merge_profiles(batches) → list[Profile]
    fetch_batch(model, query, filters) → list[Profile]        (async)
    search_profiles(model, keyword, filters) → list[Profile]  (async)
"""

import asyncio
import logging
from collections.abc import Iterable

from leads.errors import (
    LeadSearchError,
    NoProfilesFoundError,
    RateLimitedError,
    is_rate_limit_message,
)
from leads.extract import parse_profiles
from leads.llm import SearchModel
from leads.models import Profile, SearchFilters
from leads.prompts import build_batch_prompt, build_variations

log = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3


def normalize_username(raw: str) -> str:
    """
    Canonicalise a handle: '@Joao_Tattoo/' and 'joao_tattoo' → 'joao_tattoo'.

    Lowercases, drops leading '@', and cuts off anything from the first
    '/' or '?' (URL paths and query strings the model glued on).
    """
    handle = raw.strip().lower().lstrip("@")
    for sep in ("/", "?"):
        handle = handle.split(sep, 1)[0]
    return handle.strip()


def is_valid_username(handle: str) -> bool:
    return len(handle) >= MIN_USERNAME_LENGTH and not any(ch.isspace() for ch in handle)


def merge_profiles(batches: Iterable[Iterable[Profile]]) -> list[Profile]:
    """
    Flatten batches in order and keep the first profile per normalized handle.

    Profiles whose handle is too short or contains whitespace are dropped.
    """
    index: dict[str, Profile] = {}

    for batch in batches:
        for profile in batch:
            handle = normalize_username(profile.username)
            if not is_valid_username(handle):
                continue
            if handle not in index:
                index[handle] = profile.model_copy(update={"username": handle})

    return list(index.values())


async def fetch_batch(
    model: SearchModel,
    query: str,
    filters: SearchFilters | None = None,
) -> list[Profile]:
    """Run one query variation. Never raises; failures yield []."""
    prompt = build_batch_prompt(query, filters)
    try:
        text = await model.generate(prompt, search=True)
        profiles = parse_profiles(text)
    except Exception as exc:
        log.warning("Batch failed for query %r: %s", query, exc)
        return []

    if not profiles:
        log.warning("No usable profiles in reply for query %r", query)
    else:
        log.info("  %d profiles from %r", len(profiles), query)
    return profiles


async def search_profiles(
    model: SearchModel,
    keyword: str,
    filters: SearchFilters | None = None,
) -> list[Profile]:
    variations = build_variations(keyword, filters)
    log.info("Searching for %r with %d variations.", keyword, len(variations))

    try:
        batches = await asyncio.gather(
            *(fetch_batch(model, query, filters) for query in variations)
        )
        profiles = merge_profiles(batches)
        if not profiles:
            raise NoProfilesFoundError()
        return profiles

    except LeadSearchError:
        raise
    except Exception as exc:
        log.error("Lead search failed for %r: %s", keyword, exc)
        if is_rate_limit_message(str(exc)):
            raise RateLimitedError() from exc
        raise
