"""Gemini API client used to generate per-file documentation.

Wraps the ``google-genai`` SDK behind a single ``generate(prompt)``
operation. The SDK client and the configured model handle are created
lazily on first use and reused for every later call.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from google import genai
from google.genai import errors, types

from codenarrator.utils.config import APIConfig

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Base class for documentation generation failures."""


class MissingCredentialError(GenerationError, ValueError):
    """The API key is not available. No call can succeed."""


class ProviderError(GenerationError):
    """The Gemini API rejected or failed a request."""


class EmptyResponseError(GenerationError):
    """The Gemini API returned no text."""


@dataclass(frozen=True)
class ModelHandle:
    """A model name bound to its fixed generation parameters.

    Attributes:
        name: Gemini model identifier.
        generation_config: Sampling and length settings sent with every call.
    """

    name: str
    generation_config: types.GenerateContentConfig


class LLMClient:
    """Client for the Google Gemini API.

    The client moves through three states: uninitialized, authenticated
    (SDK client built from the API key) and model-ready (generation
    config bound). Each transition happens at most once per instance.
    There is no retry or backoff; a failed call fails that request only.
    """

    def __init__(self, config: Optional[APIConfig] = None) -> None:
        """Initialize the LLM client.

        Args:
            config: API configuration. Uses defaults if not provided.
        """
        self.config = config or APIConfig()
        self._api_key = os.getenv(self.config.api_key_env, "")
        self._client: Optional[genai.Client] = None
        self._model: Optional[ModelHandle] = None

    @property
    def client(self) -> genai.Client:
        """Lazily initialize the Gemini SDK client.

        Returns:
            An authenticated ``genai.Client`` instance.

        Raises:
            MissingCredentialError: If the API key is not set.
        """
        if self._client is None:
            if not self._api_key:
                raise MissingCredentialError(
                    f"{self.config.api_key_env} is not set. Provide it via the "
                    "environment or a .env file."
                )
            self._client = genai.Client(api_key=self._api_key)
            logger.debug(
                "Gemini client initialized (model: %s)", self.config.model
            )
        return self._client

    @property
    def model(self) -> ModelHandle:
        """Lazily build the model handle with fixed generation parameters.

        Returns:
            The ModelHandle shared by all generate calls.

        Raises:
            MissingCredentialError: If the API key is not set.
        """
        if self._model is None:
            # Authenticate first so a missing key fails before anything else.
            _ = self.client
            self._model = ModelHandle(
                name=self.config.model,
                generation_config=types.GenerateContentConfig(
                    temperature=self.config.temperature,
                    top_p=self.config.top_p,
                    top_k=self.config.top_k,
                    max_output_tokens=self.config.max_output_tokens,
                ),
            )
        return self._model

    @property
    def is_ready(self) -> bool:
        """Whether the model handle has been built."""
        return self._model is not None

    def ensure_ready(self) -> None:
        """Authenticate and bind the model without making a request.

        Raises:
            MissingCredentialError: If the API key is not set.
        """
        _ = self.model

    def generate(self, prompt: str) -> str:
        """Generate text for a prompt using the configured Gemini model.

        Args:
            prompt: The full prompt text.

        Returns:
            The non-empty response text.

        Raises:
            ValueError: If the prompt is empty or whitespace only.
            MissingCredentialError: If the API key is not set.
            ProviderError: If the API call fails.
            EmptyResponseError: If the response carries no text.
        """
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValueError("Prompt must be a non-empty string")

        model = self.model
        logger.debug(
            "Sending request to %s: %s%s",
            model.name,
            prompt[:100],
            "..." if len(prompt) > 100 else "",
        )

        client = self.client
        try:
            response = client.models.generate_content(
                model=model.name,
                contents=prompt,
                config=model.generation_config,
            )
        except errors.APIError as e:
            raise ProviderError(_describe_api_error(e)) from e
        except Exception as e:
            # Transport failures (connection, timeout) carry no payload.
            raise ProviderError(f"Failed to generate content: {e}") from e

        text = response.text
        if not text:
            raise EmptyResponseError("No content generated - empty response")

        logger.debug("Received response (%d characters)", len(text))
        return text

    def check_connection(self) -> str:
        """Verify that the configured model is reachable.

        Returns:
            The model name that answered.

        Raises:
            MissingCredentialError: If the API key is not set.
            ProviderError: If the model cannot be reached.
            EmptyResponseError: If the model answers with no text.
        """
        logger.info("Testing access to model: %s", self.config.model)
        self.generate("Hello")
        return self.model.name


def _describe_api_error(error: errors.APIError) -> str:
    """Build a diagnostic message, preferring the structured error payload."""
    message = "Failed to generate content"
    details = getattr(error, "details", None)
    if details:
        return f"{message}: {json.dumps(details, indent=2, default=str)}"
    return f"{message}: {error}"
