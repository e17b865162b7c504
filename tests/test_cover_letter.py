import pytest

from config import EnvCredentialSource, StaticCredentialSource
from cover_letter import generate_cover_letter
from letter_types import GenerationConfig, InputData, LetterLength, LetterStyle
from llm_manager import ErrorKind, GenerationError, LLMManager
from tests.conftest import FakeGeminiModel


@pytest.fixture
def inputs():
    return InputData(
        name="Jane Doe",
        recent_position="Data Analyst",
        background="Five years of analytics.",
        company_name="Acme Corp",
        target_position="Senior Analyst",
        job_description="Own the reporting stack.",
    )


def _factory(model, seen_keys=None):
    def build(api_key):
        if seen_keys is not None:
            seen_keys.append(api_key)
        return LLMManager(api_key=api_key, client=model)
    return build


def test_missing_key_fails_before_any_call(inputs):
    model = FakeGeminiModel()
    with pytest.raises(GenerationError) as info:
        generate_cover_letter(inputs, GenerationConfig(), StaticCredentialSource(None), _factory(model))

    assert info.value.kind is ErrorKind.MISSING_CREDENTIAL
    assert "API_KEY" in info.value.message
    assert model.calls == []


def test_env_credential_source_reads_api_key(monkeypatch, inputs):
    monkeypatch.setenv("API_KEY", "env-key")
    keys = []
    model = FakeGeminiModel(text="Letter")

    assert generate_cover_letter(inputs, GenerationConfig(), EnvCredentialSource(), _factory(model, keys)) == "Letter"
    assert keys == ["env-key"]


def test_blank_env_key_counts_as_missing(monkeypatch, inputs):
    monkeypatch.setenv("API_KEY", "   ")
    with pytest.raises(GenerationError) as info:
        generate_cover_letter(inputs, GenerationConfig(), EnvCredentialSource(), _factory(FakeGeminiModel()))
    assert info.value.kind is ErrorKind.MISSING_CREDENTIAL


def test_text_is_returned_verbatim(inputs):
    raw = "\n**Dear Acme Corp Hiring Team,**\n\nI am writing...   \n"
    model = FakeGeminiModel(text=raw)

    result = generate_cover_letter(
        inputs, GenerationConfig(LetterLength.SHORT, LetterStyle.PASSIONATE),
        StaticCredentialSource("k"), _factory(model),
    )

    assert result == raw
    assert len(model.calls) == 1
    assert "approximately 100 words" in model.calls[0]["prompt"]
    assert "Tone: Passionate." in model.calls[0]["prompt"]


def test_client_construction_failure_is_classified(inputs):
    def broken(api_key):
        raise RuntimeError("404 model not found")

    with pytest.raises(GenerationError) as info:
        generate_cover_letter(inputs, GenerationConfig(), StaticCredentialSource("k"), broken)
    assert info.value.kind is ErrorKind.NOT_FOUND
