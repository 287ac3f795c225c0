"""
Generation Client - Font pairings and code snippets from Google Gemini

Both calls send a fixed JSON response schema and validate the returned text
against the matching pydantic model, so callers only ever see a complete
PairingResult / CodeSnippets or a GenerationError.
"""

import logging
from typing import Optional, Type, TypeVar

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel, ValidationError

from config import Settings
from models import CodeSnippets, PairingResult

from .errors import GenerationError
from .prompts import (
    PAIRING_SCHEMA,
    PAIRING_SYSTEM_INSTRUCTION,
    SNIPPETS_SCHEMA,
    SNIPPETS_SYSTEM_INSTRUCTION,
    build_pairing_prompt,
    build_snippets_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

PAIRING_FAILED_MESSAGE = (
    "Failed to generate font pairing. The model may be unable to find a suitable "
    "match or there was a network issue."
)
SNIPPETS_FAILED_MESSAGE = "Failed to generate code snippets."

ModelT = TypeVar("ModelT", bound=BaseModel)


class GenerationClient:
    """Async wrapper around the two Gemini calls the app makes."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout_ms: Optional[int] = None,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize the generation client.

        Args:
            api_key: Gemini API key (ignored when ``client`` is given)
            model: Gemini model name
            timeout_ms: Optional per-request timeout passed to the SDK
            client: Pre-built ``genai.Client``, mainly for tests
        """
        if client is None:
            http_options = types.HttpOptions(timeout=timeout_ms) if timeout_ms else None
            client = genai.Client(api_key=api_key, http_options=http_options)
        self._client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationClient":
        """Build a client from settings; raises ConfigurationError without an API key."""
        return cls(
            api_key=settings.require_api_key(),
            model=settings.gemini_model,
            timeout_ms=settings.gemini_timeout_ms,
        )

    async def request_pairing(self, font_name: str) -> PairingResult:
        """
        Ask the model for headline/body/accent fonts that pair with ``font_name``.

        Raises:
            ValueError: ``font_name`` is blank
            GenerationError: the call failed or the answer did not match the schema
        """
        font_name = font_name.strip()
        if not font_name:
            raise ValueError("font_name must not be empty")

        logger.info(f"Requesting font pairing for '{font_name}'")
        text = await self._generate(
            contents=build_pairing_prompt(font_name),
            system_instruction=PAIRING_SYSTEM_INSTRUCTION,
            schema=PAIRING_SCHEMA,
            failure_message=PAIRING_FAILED_MESSAGE,
        )
        return self._parse(text, PairingResult, PAIRING_FAILED_MESSAGE)

    async def request_snippets(self, font_name: str, result: PairingResult) -> CodeSnippets:
        """Ask the model for HTML, CSS and Tailwind snippets for a pairing."""
        logger.info(
            f"Requesting code snippets for '{font_name}' "
            f"({result.headline.name} / {result.body.name} / {result.accent.name})"
        )
        text = await self._generate(
            contents=build_snippets_prompt(font_name, result),
            system_instruction=SNIPPETS_SYSTEM_INSTRUCTION,
            schema=SNIPPETS_SCHEMA,
            failure_message=SNIPPETS_FAILED_MESSAGE,
        )
        return self._parse(text, CodeSnippets, SNIPPETS_FAILED_MESSAGE)

    async def _generate(
        self,
        contents: str,
        system_instruction: str,
        schema: types.Schema,
        failure_message: str,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=schema,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except (genai_errors.APIError, httpx.HTTPError) as e:
            logger.warning(f"Gemini request failed: {e}")
            raise GenerationError(failure_message, detail=str(e)) from e

        text = (response.text or "").strip()
        if not text:
            logger.warning("Gemini returned an empty response")
            raise GenerationError(failure_message, detail="empty response text")
        return text

    @staticmethod
    def _parse(text: str, model_cls: Type[ModelT], failure_message: str) -> ModelT:
        try:
            return model_cls.model_validate_json(text)
        except ValidationError as e:
            logger.warning(f"Response did not match {model_cls.__name__} schema: {e.error_count()} error(s)")
            raise GenerationError(failure_message, detail=str(e)) from e
