"""Gemini text-generation invoker.

Sends one prompt to the Gemini API with a fixed sampling configuration and
returns the raw completion text. The SDK client is passed in by the caller
(see initialize_recipe_service), so tests can substitute a fake client.

No retry, caching or rate-limit handling: one user action maps to exactly
one outbound call.
"""

import asyncio

from google import genai
from google.genai import types

from recipe_assistant.utils.logger import logger
from recipe_assistant.utils.result import Err, ErrorKind, Ok, Result


DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.8
DEFAULT_MAX_OUTPUT_TOKENS = 8192


def create_gemini_client(api_key: str) -> genai.Client:
    """Build a Gemini SDK client.

    Raises:
        ValueError: If api_key is empty.
    """
    if not api_key:
        raise ValueError("GEMINI_API_KEY is required")
    return genai.Client(api_key=api_key)


class GeminiInvoker:
    """Call a Gemini model and hand back the raw completion."""

    def __init__(
        self,
        client: genai.Client,
        model: str,
        temperature: float = DEFAULT_TEMPERATURE,
        top_p: float = DEFAULT_TOP_P,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
    ) -> None:
        """Initialize the invoker.

        Args:
            client: Gemini SDK client (or a test double exposing ``models.generate_content``).
            model: Model id, e.g. "gemini-2.5-flash".
            temperature: Sampling temperature (bounded randomness).
            top_p: Nucleus sampling threshold.
            max_output_tokens: Upper bound on completion length.
        """
        self.client = client
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_output_tokens = max_output_tokens

    @property
    def generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.temperature,
            top_p=self.top_p,
            max_output_tokens=self.max_output_tokens,
        )

    async def generate(self, prompt: str) -> Result[str]:
        """Send ``prompt`` to the model (single attempt).

        Returns:
            Ok with the completion text, or Err(GENERATION) wrapping the
            provider/transport exception. An empty completion is also a
            generation error.
        """
        logger.debug(f"Calling {self.model} (prompt: {len(prompt)} chars)")
        try:
            # Sync SDK call runs in a worker thread to keep the event loop free
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=prompt,
                config=self.generation_config,
            )
        except Exception as e:
            logger.error(f"Gemini API call failed: {type(e).__name__}: {e}")
            return Err(kind=ErrorKind.GENERATION, message="Failed to generate content", cause=e)

        text = getattr(response, "text", None)
        if not text:
            logger.warning(f"Gemini returned an empty completion (model={self.model})")
            return Err(kind=ErrorKind.GENERATION, message="Model returned an empty completion")

        logger.debug(f"Gemini completion received ({len(text)} chars)")
        return Ok(text)
