"""
Shared pytest fixtures and configuration.
"""

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from climb.api.app import create_app
from climb.clock import VirtualScheduler
from climb.services.genai import GeminiClient
from climb.settings import reset_settings

BREAKDOWN = [
    {"title": "Outline the chapter", "points": 20},
    {"title": "Write the draft", "points": 35},
    {"title": "Proofread", "points": 10},
]
ADVICE = "One ledge at a time, the summit is waiting."


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _fake_gemini(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    if "generationConfig" in body:
        return httpx.Response(200, json=gemini_reply(json.dumps(BREAKDOWN)))
    return httpx.Response(200, json=gemini_reply(ADVICE))


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from the default reward/penalty settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture()
def scheduler():
    return VirtualScheduler()


@pytest.fixture()
def text_client():
    return GeminiClient(api_key="test-key", transport=httpx.MockTransport(_fake_gemini))


@pytest.fixture()
def app(scheduler, text_client):
    """Create a fresh app instance per test, driven by virtual time."""
    return create_app(scheduler=scheduler, text_client=text_client)


@pytest_asyncio.fixture()
async def client(app):
    """Async HTTP client wired directly to the ASGI app (no server needed)."""
    async with app.router.lifespan_context(app):
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
