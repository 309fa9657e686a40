"""
Lead data model.

Profile is built from whatever the model returned, so every field is
coerced to a string and the optional ones collapse to None when blank.
SearchFilters only shapes prompt text; nothing here enforces it.
"""

from typing import Any

from pydantic import BaseModel, field_validator


class Profile(BaseModel):
    name: str
    username: str
    bio: str = ""
    followers: str | None = None
    profile_pic: str | None = None
    instagram_url: str
    whatsapp: str | None = None

    @field_validator("name", "username", "instagram_url", "bio", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("followers", "profile_pic", "whatsapp", mode="before")
    @classmethod
    def _coerce_optional(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        if not text or text.lower() in ("null", "none"):
            return None
        return text


class SearchFilters(BaseModel):
    min_followers: str | None = None
    max_followers: str | None = None
    bio_keyword: str | None = None

    @field_validator("min_followers", "max_followers", "bio_keyword", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def is_active(self) -> bool:
        return bool(self.min_followers or self.max_followers or self.bio_keyword)


class SearchState(BaseModel):
    """Transient UI state for the current search."""

    loading: bool = False
    error: str | None = None
    has_searched: bool = False

    def started(self) -> "SearchState":
        return SearchState(loading=True, error=None, has_searched=True)

    def finished(self, error: str | None = None) -> "SearchState":
        return SearchState(loading=False, error=error, has_searched=True)
