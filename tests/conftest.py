"""Shared fixtures."""

import asyncio
import logging
from types import SimpleNamespace
from typing import Optional

import httpx
import openai
import pytest

import promptengineer.core.logging
from promptengineer.core.llm_base import Completion
from promptengineer.core.logging import LOGGER_NAME

API_URL = "https://api.openai.com/v1/chat/completions"


class FakeClient:
    """Completion client double that records requests."""

    def __init__(self, text: str = "Generated text", error: Optional[Exception] = None):
        self.model = "test-model"
        self.text = text
        self.error = error
        self.calls: list[list[dict[str, str]]] = []
        self.release: Optional[asyncio.Event] = None

    async def complete(self, messages):
        self.calls.append(messages)
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return Completion(text=self.text, model=self.model, tokens_input=42, tokens_output=7)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def api_request():
    return httpx.Request("POST", API_URL)


def make_response(content="Generated text", choices=True, usage=True):
    """Build an object shaped like an openai ChatCompletion."""
    return SimpleNamespace(
        model="gpt-3.5-turbo-0125",
        choices=[SimpleNamespace(message=SimpleNamespace(role="assistant", content=content))] if choices else [],
        usage=SimpleNamespace(prompt_tokens=120, completion_tokens=80) if usage else None,
    )


def status_error(request, status_code=500):
    """Build an openai status error for a given HTTP status."""
    response = httpx.Response(status_code, request=request)
    return openai.APIStatusError("Server error", response=response, body=None)


@pytest.fixture(autouse=True)
def reset_logging():
    """Give each test an unconfigured promptengineer logger."""
    logger = logging.getLogger(LOGGER_NAME)
    yield
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    promptengineer.core.logging._default_logger = None
