"""
Generative text adapters — task breakdown and coaching lines from the Gemini
REST API.

Nothing here may fail into the core: every public coroutine degrades to a
fixed fallback (an empty breakdown, a stock motivational line).
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import config

logger = logging.getLogger(__name__)

ADVICE_EMPTY_FALLBACK = "Keep climbing, the view is better at the top!"
ADVICE_ERROR_FALLBACK = "The summit is within reach!"

SUBTASK_MIN_POINTS = 10
SUBTASK_MAX_POINTS = 50

_BREAKDOWN_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING"},
            "points": {"type": "NUMBER"},
        },
        "required": ["title", "points"],
    },
}


class GenerationError(Exception):
    """The text service was unreachable or returned something unusable."""


def sanitize_points(value: Any) -> int:
    """Coerce an externally produced point value to a non-negative int (0 when unusable)."""
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


@dataclass
class SubTaskDraft:
    title: str
    points: int


class GeminiClient:
    """Thin async wrapper around models/{model}:generateContent."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = config.gemini_api_key if api_key is None else api_key
        self.model = model or config.gemini_model
        self.base_url = (base_url or config.gemini_base_url).rstrip("/")
        self.timeout_s = timeout_s or config.gemini_timeout_s
        self._transport = transport

    async def generate(self, prompt: str, response_schema: Optional[dict] = None) -> str:
        if not self.api_key:
            raise GenerationError("no API key configured")

        body: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if response_schema is not None:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            }

        url = f"{self.base_url}/models/{self.model}:generateContent"
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout_s) as client:
                r = await client.post(url, params={"key": self.api_key}, json=body)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GenerationError(str(e)) from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(p.get("text", "") for p in parts)
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationError(f"malformed response: {e}") from e


class TaskPlanner:

    def __init__(self, client: GeminiClient):
        self._client = client

    async def breakdown(self, title: str) -> List[SubTaskDraft]:
        prompt = (
            "Break down the following productivity task into 3-5 actionable sub-steps. "
            f"Assign a point value ({SUBTASK_MIN_POINTS}-{SUBTASK_MAX_POINTS}) to each "
            f'based on difficulty. Task: "{title}"'
        )
        try:
            text = await self._client.generate(prompt, response_schema=_BREAKDOWN_SCHEMA)
            items = json.loads(text or "[]")
        except (GenerationError, ValueError) as e:
            logger.warning("Task breakdown failed for %r: %s", title, e)
            return []
        if not isinstance(items, list):
            logger.warning("Task breakdown returned %s, expected a list", type(items).__name__)
            return []

        drafts: List[SubTaskDraft] = []
        for item in items:
            if not isinstance(item, dict) or not str(item.get("title", "")).strip():
                continue
            points = sanitize_points(item.get("points"))
            if points:
                points = min(max(points, SUBTASK_MIN_POINTS), SUBTASK_MAX_POINTS)
            drafts.append(SubTaskDraft(title=str(item["title"]).strip(), points=points))
        return drafts


class CoachService:

    def __init__(self, client: GeminiClient):
        self._client = client

    async def advice(self, points: int, height: int) -> str:
        prompt = (
            "You are a motivational Mountain Climbing Coach. "
            f"A user has {points} focus points and has climbed {height} meters today. "
            "Give a short, punchy, climbing-themed motivational quote or advice (max 20 words)."
        )
        try:
            text = await self._client.generate(prompt)
        except GenerationError as e:
            logger.warning("Coach advice unavailable: %s", e)
            return ADVICE_ERROR_FALLBACK
        return text.strip() or ADVICE_EMPTY_FALLBACK
