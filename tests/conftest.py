import json

import pytest

from leads.prompts import build_variations


class FakeModel:
    """
    Stands in for a hosted search model.

    `replies` is parallel to build_variations(keyword): each entry is the
    reply text for that variation, or an exception instance to raise.
    """

    name = "fake-model"

    def __init__(self, keyword: str, replies: list, filters=None):
        self.variations = build_variations(keyword, filters)
        self.replies    = replies
        self.prompts: list[str] = []

    async def generate(self, prompt: str, *, search: bool = True) -> str:
        self.prompts.append(prompt)
        for query, reply in zip(self.variations, self.replies):
            if query in prompt:
                if isinstance(reply, Exception):
                    raise reply
                return reply
        return ""


def profile_dict(username: str, name: str | None = None, **extra) -> dict:
    data = {
        "name": name or username.strip("@/").title(),
        "username": username,
        "bio": "Tatuagens finas e realismo. Agende pelo WhatsApp.",
        "followers": "12k",
        "profile_pic": None,
        "instagram_url": f"https://instagram.com/{username.strip('@/')}",
        "whatsapp": None,
    }
    data.update(extra)
    return data


def as_reply(*profiles: dict) -> str:
    return json.dumps(list(profiles), ensure_ascii=False)


@pytest.fixture
def fake_model_factory():
    return FakeModel
