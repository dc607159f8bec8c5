"""
Thin wrapper around the Anthropic SDK used for recommendation text.
"""

import logging

import anthropic

from babysleep.utils.constants import insight_defaults

logger = logging.getLogger(__name__)


class LLMUnavailableError(Exception):
    """The completion service could not produce a usable reply."""


class AnthropicCompletionClient:
    """Send a single-turn prompt and return the reply text"""

    def __init__(self, api_key, model=None, max_tokens=None, timeout=None, client=None):
        self.model = model or insight_defaults['model']
        self.max_tokens = max_tokens or insight_defaults['max_tokens']
        self._client = client or anthropic.Anthropic(
            api_key=api_key,
            timeout=timeout or insight_defaults['timeout_seconds']
        )

    def complete(self, prompt):
        """
        Ask the model for a completion.

        Returns:
            str: Text of the first content block

        Raises:
            LLMUnavailableError: On any SDK error or a reply without text
        """
        try:
            message = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}]
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic call failed: {e}")
            raise LLMUnavailableError(str(e)) from e

        if not message.content or message.content[0].type != 'text':
            raise LLMUnavailableError("Model reply contained no text block")

        return message.content[0].text
