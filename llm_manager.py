"""
LLM Manager - Google Gemini adapter
One generate_content call per request; SDK failures leave this module as GenerationError
"""

from enum import Enum
from typing import Any, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from loguru import logger

from config import GEMINI_MODEL, GENERATION_TEMPERATURE


class ErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    EMPTY_RESPONSE = "empty_response"
    QUOTA = "quota"
    CAPACITY = "capacity"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


MISSING_KEY_MESSAGE = "API Key is missing. Please ensure 'API_KEY' is set in your environment."
EMPTY_RESPONSE_MESSAGE = "Empty response from AI."
QUOTA_MESSAGE = "API Quota exceeded. Please wait a minute and try again."
CAPACITY_MESSAGE = (
    "The Gemini model is currently at capacity or 'out of stock' in your region. "
    "Please try again in a few minutes or check Google AI Studio status."
)
NOT_FOUND_MESSAGE = (
    "The requested Gemini model is not available for this API key. "
    "Check the GEMINI_MODEL setting or try again later."
)


class GenerationError(Exception):
    """A failed generation call, tagged with the kind the UI switches on."""

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause


_QUOTA_PHRASES = ("429", "quota", "resource exhausted", "resource_exhausted", "too many requests")
_CAPACITY_PHRASES = ("overloaded", "out of stock", "503")
_NOT_FOUND_PHRASES = ("404", "not found")


def classify_error(exc: BaseException) -> GenerationError:
    """Map an SDK/transport failure to a GenerationError.

    Exception types are checked first; message matching is a best-effort
    fallback for errors that arrive wrapped or as plain exceptions. Capacity
    phrases win over quota ones, so "429 ... overloaded" reads as capacity.
    """
    if isinstance(exc, GenerationError):
        return exc
    if isinstance(exc, google_exceptions.ResourceExhausted):
        return GenerationError(ErrorKind.QUOTA, QUOTA_MESSAGE, exc)
    if isinstance(exc, google_exceptions.ServiceUnavailable):
        return GenerationError(ErrorKind.CAPACITY, CAPACITY_MESSAGE, exc)
    if isinstance(exc, google_exceptions.NotFound):
        return GenerationError(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE, exc)

    msg = str(exc) or ""
    lowered = msg.lower()
    if any(phrase in lowered for phrase in _CAPACITY_PHRASES):
        return GenerationError(ErrorKind.CAPACITY, CAPACITY_MESSAGE, exc)
    if any(phrase in lowered for phrase in _QUOTA_PHRASES):
        return GenerationError(ErrorKind.QUOTA, QUOTA_MESSAGE, exc)
    if any(phrase in lowered for phrase in _NOT_FOUND_PHRASES):
        return GenerationError(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE, exc)
    return GenerationError(ErrorKind.UNKNOWN, f"AI Service Error: {msg}", exc)


def _response_text(response: Any) -> str:
    """Read response.text without letting a blocked/empty candidate raise."""
    if response is None:
        return ""
    try:
        return response.text or ""
    except ValueError:
        # The SDK raises ValueError when no candidate has text parts
        return ""


class LLMManager:
    """Thin wrapper over a configured Gemini GenerativeModel."""

    def __init__(self, api_key: str, model_name: str = GEMINI_MODEL,
                 temperature: float = GENERATION_TEMPERATURE, client: Any = None):
        self.model_name = model_name
        self.temperature = temperature
        if client is None:
            genai.configure(api_key=api_key)
            client = genai.GenerativeModel(model_name)
        self.client = client
        logger.debug("LLMManager initialized with model {}", model_name)

    def generate(self, prompt: str) -> str:
        """Generate text for a single prompt. Raises GenerationError on any failure."""
        try:
            response = self.client.generate_content(
                prompt,
                generation_config={"temperature": self.temperature},
            )
        except Exception as e:
            error = classify_error(e)
            logger.warning("Gemini call failed ({}): {}", error.kind.value, e)
            raise error from e

        text = _response_text(response)
        if not text:
            logger.warning("Gemini returned an empty response")
            raise GenerationError(ErrorKind.EMPTY_RESPONSE, EMPTY_RESPONSE_MESSAGE)
        logger.debug("Generated text ({} chars)", len(text))
        return text
