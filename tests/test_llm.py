import asyncio
from types import SimpleNamespace

import pytest

from leads.llm import GeminiSearchModel, OpenAISearchModel, get_model


class _Recorder:
    """Async callable that records kwargs and returns a canned response."""

    def __init__(self, response):
        self.response = response
        self.calls: list[dict] = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return self.response


class TestGeminiSearchModel:
    """Test the Gemini client wrapper."""

    def _model(self, text):
        recorder = _Recorder(SimpleNamespace(text=text))
        client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=recorder)))
        return GeminiSearchModel(model="gemini-test", client=client), recorder

    def test_search_enables_grounding(self):
        """Test the Google Search tool is attached when searching."""
        model, recorder = self._model('[{"name": "x"}]')

        text = asyncio.run(model.generate("find leads"))

        assert text == '[{"name": "x"}]'
        call = recorder.calls[0]
        assert call["model"] == "gemini-test"
        assert call["contents"] == "find leads"
        assert call["config"].tools[0].google_search is not None

    def test_no_search(self):
        """Test no tools are sent when search is off."""
        model, recorder = self._model("ok")

        asyncio.run(model.generate("hi", search=False))

        assert not recorder.calls[0]["config"].tools

    def test_empty_text(self):
        """Test a reply without text becomes an empty string."""
        model, _ = self._model(None)
        assert asyncio.run(model.generate("hi")) == ""


class TestOpenAISearchModel:
    """Test the OpenAI client wrapper."""

    def test_web_search_tool(self):
        """Test the hosted web search tool is requested."""
        recorder = _Recorder(SimpleNamespace(output_text="[]"))
        client = SimpleNamespace(responses=SimpleNamespace(create=recorder))
        model = OpenAISearchModel(model="gpt-test", client=client)

        text = asyncio.run(model.generate("find leads"))

        assert text == "[]"
        assert recorder.calls[0]["tools"] == [{"type": "web_search_preview"}]
        assert recorder.calls[0]["input"] == "find leads"


class TestGetModel:
    """Test provider selection."""

    def test_unknown_provider(self):
        """Test an unknown provider is rejected."""
        with pytest.raises(ValueError):
            get_model("bing")
