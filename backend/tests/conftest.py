import pytest
from fastapi.testclient import TestClient

from cvsuggest.config import Settings, get_settings
from cvsuggest.main import app
from cvsuggest.routers.generate import get_llm

THREE = '{"suggestions":[{"option":1,"text":"A"},{"option":2,"text":"B"},{"option":3,"text":"C"}]}'


class FakeLLM:
    """Stands in for the completion API; records what it was asked."""

    def __init__(self, reply: str = THREE, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def chat(self, messages, temperature=None, response_format=None):
        self.calls.append(
            {"messages": messages, "temperature": temperature, "response_format": response_format}
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings():
    return Settings(openai_api_key="sk-test-key", openai_model="gpt-4o-mini", llm_temperature=0.8, llm_json_mode=True)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def client(settings, fake_llm):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_llm] = lambda: fake_llm
    yield TestClient(app)
    app.dependency_overrides.clear()
