"""
Hosted generative-search clients.

Both providers get the same call: a model id, a free-text prompt and a
switch for search grounding. They return the raw reply text; parsing is
the caller's job.

Public API:
    SearchModel                       protocol the orchestration depends on
    GeminiSearchModel / OpenAISearchModel
    get_model(provider)               build the configured client
"""

import logging
from typing import Protocol

from google import genai
from google.genai import types
from openai import AsyncOpenAI

from leads import config

log = logging.getLogger(__name__)

TEMPERATURE = 0.1   # low temperature keeps the JSON shape stable


class SearchModel(Protocol):
    name: str

    async def generate(self, prompt: str, *, search: bool = True) -> str: ...


class GeminiSearchModel:
    """Gemini with the Google Search grounding tool."""

    def __init__(self, model: str = config.DEFAULT_MODELS["gemini"], client: genai.Client | None = None):
        self.name   = model
        self.client = client or genai.Client()   # reads GEMINI_API_KEY / GOOGLE_API_KEY

    async def generate(self, prompt: str, *, search: bool = True) -> str:
        tools = [types.Tool(google_search=types.GoogleSearch())] if search else None
        response = await self.client.aio.models.generate_content(
            model=self.name,
            contents=prompt,
            config=types.GenerateContentConfig(tools=tools, temperature=TEMPERATURE),
        )
        return response.text or ""


class OpenAISearchModel:
    """OpenAI Responses API with the hosted web search tool."""

    def __init__(self, model: str = config.DEFAULT_MODELS["openai"], client: AsyncOpenAI | None = None):
        self.name   = model
        self.client = client or AsyncOpenAI()   # reads OPENAI_API_KEY

    async def generate(self, prompt: str, *, search: bool = True) -> str:
        tools = [{"type": "web_search_preview"}] if search else []
        response = await self.client.responses.create(
            model=self.name,
            input=prompt,
            tools=tools,
            temperature=TEMPERATURE,
        )
        return response.output_text or ""


_PROVIDERS = {
    "gemini": GeminiSearchModel,
    "openai": OpenAISearchModel,
}


def get_model(provider: str | None = None, model: str | None = None) -> SearchModel:
    provider = (provider or config.PROVIDER).lower()
    if provider not in _PROVIDERS:
        raise ValueError(f"Unknown LEADS_PROVIDER {provider!r}; expected one of {sorted(_PROVIDERS)}")

    model = model or (config.MODEL if provider == config.PROVIDER else config.DEFAULT_MODELS[provider])
    log.info("Using %s model %s", provider, model)
    return _PROVIDERS[provider](model=model)
