"""Moderation oracle adapter.

The comment lifecycle only depends on :class:`ModerationOracle`: an object
whose ``moderate`` coroutine turns comment text into either a
:class:`ModerationVerdict` or a :class:`ModerationUnavailable` result. The
production implementation talks to the Gemini ``generateContent`` REST API
over httpx and never raises to its caller; every transport or parsing problem
comes back as ``ModerationUnavailable`` so the caller can apply its fail-open
policy deterministically.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from comment_stage.core.errors import DependencyUnavailable
from comment_stage.core.settings import settings

# Configure logger for this module
logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

MODERATION_PROMPT = """You are a content moderator for a comment system. \
Analyze the following comment and determine if it meets these guidelines:

Guidelines:
- No offensive or discriminatory language
- No profanity or vulgar content
- No personal attacks or harassment
- No spam or promotional content
- Be respectful and constructive
- Stay on topic

Analyze the comment and respond with a JSON object in the following format:
{
  "approved": true/false,
  "rating": 1-5 (only if approved, where 1 is poor quality and 5 is excellent quality),
  "reason": "explanation for rejection" (only if rejected),
  "feedback": "brief feedback about the comment quality"
}

Comment to analyze:
"""

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class ModerationVerdict:
    """Decision rendered by the oracle for one piece of text."""

    approved: bool
    rating: int | None = None
    reason: str | None = None
    feedback: str | None = None


@dataclass(frozen=True)
class ModerationUnavailable:
    """The oracle could not produce a usable verdict."""

    reason: str


ModerationOutcome = ModerationVerdict | ModerationUnavailable


class ModerationOracle(Protocol):
    """Contract the comment lifecycle requires from a moderation backend."""

    async def moderate(self, text: str) -> ModerationOutcome:
        """Return a verdict for ``text`` or an unavailability marker."""
        ...

    async def close(self) -> None:
        """Release any network resources held by the oracle."""
        ...


@dataclass(frozen=True)
class ModerationConfig:
    """Immutable configuration for the Gemini moderation client."""

    api_key: str | None
    model: str
    base_url: str
    timeout_seconds: float
    default_rating: int


def load_moderation_config() -> ModerationConfig:
    """Build configuration object from global settings."""

    return ModerationConfig(
        api_key=settings.moderation_api_key,
        model=settings.moderation_model,
        base_url=settings.moderation_base_url,
        timeout_seconds=float(settings.moderation_timeout_seconds),
        default_rating=settings.default_suggested_rating,
    )


def build_prompt(text: str) -> str:
    """Embed ``text`` in the moderation instructions."""
    return f'{MODERATION_PROMPT}\n"{text}"\n\nProvide only the JSON response, no additional text.'


def _coerce_rating(value: Any, default: int) -> int:
    # bool is an int subclass; JSON true is not a rating.
    if isinstance(value, bool):
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and MIN_RATING <= value <= MAX_RATING:
        return value
    return default


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_verdict(text: str, default_rating: int) -> ModerationVerdict:
    """Parse the model's answer into a verdict.

    The model is asked for bare JSON but frequently wraps it in prose or code
    fences, so the outermost ``{...}`` block is extracted first.

    Raises:
        DependencyUnavailable: If no JSON object can be decoded or ``approved``
            is not a boolean.
    """
    match = _JSON_OBJECT.search(text)
    candidate = match.group(0) if match else text
    try:
        payload = json.loads(candidate)
    except ValueError as exc:
        raise DependencyUnavailable(f"Could not parse moderation response: {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("approved"), bool):
        raise DependencyUnavailable("Invalid moderation response structure")

    approved = payload["approved"]
    return ModerationVerdict(
        approved=approved,
        rating=_coerce_rating(payload.get("rating"), default_rating) if approved else None,
        reason=None if approved else _optional_text(payload.get("reason")),
        feedback=_optional_text(payload.get("feedback")),
    )


class GeminiModerationClient:
    """HTTP client wrapper for the Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        config: ModerationConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_moderation_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def _generate(self, prompt: str) -> str:
        if not self.enabled:
            raise DependencyUnavailable("Moderation API key is not configured")

        client = await self._ensure_client()
        try:
            response = await client.post(
                f"/models/{self.config.model}:generateContent",
                json={"contents": [{"parts": [{"text": prompt}]}]},
                headers={"x-goog-api-key": self.config.api_key or ""},
            )
        except httpx.HTTPError as exc:
            raise DependencyUnavailable(f"Moderation request failed: {exc}") from exc

        if response.status_code >= httpx.codes.BAD_REQUEST:
            raise DependencyUnavailable(
                f"Moderation service responded with {response.status_code}"
            )

        try:
            body = response.json()
            parts = body["candidates"][0]["content"]["parts"]
            return "".join(str(part.get("text", "")) for part in parts)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            raise DependencyUnavailable(f"Unexpected moderation payload: {exc}") from exc

    async def moderate(self, text: str) -> ModerationOutcome:
        """Moderate ``text``; never raises."""
        try:
            answer = await self._generate(build_prompt(text))
            return parse_verdict(answer, self.config.default_rating)
        except DependencyUnavailable as exc:
            logger.warning("Moderation oracle unavailable: %s", exc.message)
            return ModerationUnavailable(reason=exc.message)

    async def close(self) -> None:
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None
