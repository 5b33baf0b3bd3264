"""Idea expansion agent.

Turns a one-line idea into a full social media post via the generative
text client. With a rendered compass prompt (see
``zawia.agents.prompts.post_prompt``) the draft follows the workspace
strategy; without one it falls back to the plain idea prompt.

The agent never persists anything; the caller decides what to do with the
draft.
"""

import logging

from pydantic import Field

from zawia.agents.llm_client import LLMClient, LLMRequest
from zawia.models.common import ZawiaBase
from zawia.models.errors import ValidationError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a creative social media strategist. Expand the user's short idea "
    "into an engaging, well-structured social media post. Make it compelling "
    "and include relevant hashtags.\n"
    'Respond with a JSON object only: {"expanded_post": "<the full post>"}'
)


class ExpandedPost(ZawiaBase):
    """Draft post produced from an idea."""

    expanded_post: str = Field(..., min_length=1)


def build_user_prompt(idea: str) -> str:
    return f"User's Idea: {idea}"


class IdeaExpansionAgent:
    """Expand a short idea into a ready-to-edit post draft."""

    def __init__(self, client: LLMClient) -> None:
        self._client = client

    async def expand(self, idea: str, prompt: str | None = None) -> ExpandedPost:
        """Raises ValidationError for an empty idea, ExternalServiceError
        for any provider or output failure."""
        idea = idea.strip()
        if not idea:
            raise ValidationError("Idea must not be empty.")
        response = await self._client.generate(
            LLMRequest(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=prompt or build_user_prompt(idea),
            ),
        )
        result = self._client.parse_structured_output(
            raw=response.content, schema=ExpandedPost,
        )
        logger.info(
            "Expanded idea via %s/%s (%d tokens)",
            response.provider, response.model, response.usage.total_tokens,
        )
        return result
