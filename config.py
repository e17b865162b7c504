import os
from pathlib import Path
from typing import Optional, Protocol

from dotenv import load_dotenv

load_dotenv()  # Load .env file if present

# Remote generation
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
API_KEY_NAME = "API_KEY"

# Local state
STORAGE_KEY = "ai_cover_letter_user_profile"
STORAGE_PATH = Path(os.getenv("COVER_LETTER_STORAGE_PATH", "output/local_storage.json"))
OUTPUT_FOLDER = Path(os.getenv("OUTPUT_FOLDER", "output/web_output"))
PDF_FILENAME = "cover-letter.pdf"
LOG_FOLDER = os.getenv("COVER_LETTER_LOG_FOLDER", "log/cover_letter")

# How long the "copied" / "saved" confirmations stay visible
FLASH_SECONDS = float(os.getenv("FLASH_SECONDS", "2.0"))


class CredentialSource(Protocol):
    def resolve(self) -> Optional[str]:
        ...


class EnvCredentialSource:
    """Resolve the API key from the process environment at call time."""

    def __init__(self, key_name: str = API_KEY_NAME) -> None:
        self.key_name = key_name

    def resolve(self) -> Optional[str]:
        key = (os.getenv(self.key_name) or "").strip()
        return key or None


class StaticCredentialSource:
    def __init__(self, key: Optional[str]) -> None:
        self.key = key

    def resolve(self) -> Optional[str]:
        return self.key or None

