"""
Cover letter generation client.
Builds the prompt from the form fields, makes one Gemini call and returns the text untouched.
"""
from typing import Callable, Optional

from loguru import logger

from config import CredentialSource, EnvCredentialSource
from enhanced_prompts import build_cover_letter_prompt
from letter_types import GenerationConfig, InputData
from llm_manager import (
    MISSING_KEY_MESSAGE,
    ErrorKind,
    GenerationError,
    LLMManager,
    classify_error,
)

LLMFactory = Callable[[str], LLMManager]


def generate_cover_letter(
    inputs: InputData,
    config: GenerationConfig,
    credentials: Optional[CredentialSource] = None,
    llm_factory: Optional[LLMFactory] = None,
) -> str:
    """
    Generate a cover letter for the given form fields.

    Args:
        inputs: All six form fields
        config: Length/style selection
        credentials: Where the API key comes from (defaults to the API_KEY env var)
        llm_factory: Builds the remote adapter from an API key (defaults to LLMManager)

    Returns:
        str: The generated letter, exactly as the model returned it

    Raises:
        GenerationError: missing key, empty response, or a classified remote failure
    """
    credentials = credentials or EnvCredentialSource()
    api_key = credentials.resolve()
    if not api_key:
        raise GenerationError(ErrorKind.MISSING_CREDENTIAL, MISSING_KEY_MESSAGE)

    prompt = build_cover_letter_prompt(inputs, config)
    logger.info(
        "Generating cover letter: ~{} words, {} tone, prompt {} chars",
        config.length.value, config.style.value, len(prompt),
    )

    factory = llm_factory or LLMManager
    try:
        llm = factory(api_key)
        return llm.generate(prompt)
    except GenerationError:
        raise
    except Exception as e:
        # Failures while building the client are classified the same way
        raise classify_error(e) from e
