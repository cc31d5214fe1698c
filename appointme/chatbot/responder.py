"""
Assistant entry point: external text generation when configured, canned
answers otherwise. External failures never reach the caller.
"""
from typing import Protocol

from appointme.chatbot.responses import build_prompt, respond
from appointme.core.exceptions import ExternalServiceError
from appointme.core.logging import get_logger

logger = get_logger(__name__, component="chatbot")

AI = "ai"
FALLBACK_NO_API_KEY = "fallback_no_api_key"


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...


async def reply(message: str, generator: TextGenerator | None) -> tuple[str, str]:
    """Returns (answer, type)."""
    if generator is None:
        return respond(message), FALLBACK_NO_API_KEY

    try:
        answer = await generator.generate(build_prompt(message))
    except ExternalServiceError as e:
        logger.warning({
            "event_type": "chatbot",
            "event_name": "external_generation_failed",
            "reason": e.reason,
            "detail": e.detail,
        })
        return respond(message), f"fallback_{e.reason}"

    return answer, AI
