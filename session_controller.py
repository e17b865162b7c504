"""
Form/session controller for the cover letter page.

Owns the six form fields, the length/style selection and the UI flags
(generating / copied / saved / error). Storage, clipboard, credentials,
the generation call and the PDF renderer are all injected.
"""
from __future__ import annotations

import json
import threading
import time
from typing import Any, Callable, Dict, Mapping, Optional

from loguru import logger

from clipboard import BrowserClipboard, Clipboard
from config import FLASH_SECONDS, CredentialSource, EnvCredentialSource
from cover_letter import generate_cover_letter
from letter_types import (
    FIELD_KEYS,
    JOB_KEYS,
    PROFILE_KEYS,
    GenerationConfig,
    InputData,
    JobFields,
    ProfileFields,
    parse_length,
    parse_style,
)
from llm_manager import ErrorKind, GenerationError
from pdf_generator import generate_cover_letter_pdf
from profile_store import InMemoryProfileStore, ProfileStore

VALIDATION_MESSAGE = "Please provide at least your background summary and the job description."
PDF_ERROR_MESSAGE = "Failed to generate PDF. You can still copy the text manually."
NOTHING_TO_EXPORT_MESSAGE = "There is no cover letter to export yet."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

LOADING_MESSAGES = [
    "Analyzing your professional story...",
    "Aligning your skills with the company mission...",
    "Crafting a compelling narrative...",
    "Optimizing for recruiters' attention...",
]

GenerateFn = Callable[[InputData, GenerationConfig], str]
PdfExporter = Callable[[str, str], bool]


class CoverLetterSession:
    """State and actions behind the single cover letter form."""

    def __init__(
        self,
        profile_store: Optional[ProfileStore] = None,
        clipboard: Optional[Clipboard] = None,
        credentials: Optional[CredentialSource] = None,
        generate_fn: Optional[GenerateFn] = None,
        pdf_exporter: Optional[PdfExporter] = None,
        clock: Callable[[], float] = time.monotonic,
        flash_seconds: float = FLASH_SECONDS,
    ) -> None:
        self.profile_store = profile_store if profile_store is not None else InMemoryProfileStore()
        self.clipboard = clipboard if clipboard is not None else BrowserClipboard()
        self.credentials = credentials if credentials is not None else EnvCredentialSource()
        self._generate_fn = generate_fn or self._default_generate
        self._pdf_exporter = pdf_exporter or generate_cover_letter_pdf
        self._clock = clock
        self.flash_seconds = flash_seconds

        self.profile = ProfileFields()
        self.job = JobFields()
        self.config = GenerationConfig()

        self.result = ""
        self.error = ""
        self.error_kind: Optional[str] = None
        self.is_generating = False
        self._copied_at: Optional[float] = None
        self._saved_at: Optional[float] = None

        # Request tokens: only the latest generate() may write its outcome
        self._lock = threading.RLock()
        self._latest_token = 0

        self.load_profile()

    def _default_generate(self, inputs: InputData, config: GenerationConfig) -> str:
        return generate_cover_letter(inputs, config, credentials=self.credentials)

    # ------------------------------------------------------------------
    # Field mutators
    # ------------------------------------------------------------------

    def set_field(self, key: str, value: str) -> None:
        """Set one text field by its form key (camelCase) or attribute name."""
        attr = FIELD_KEYS.get(key, key)
        if attr in PROFILE_KEYS.values():
            target = "profile"
        elif attr in JOB_KEYS.values():
            target = "job"
        else:
            raise KeyError(f"Unknown form field: {key}")
        value = "" if value is None else str(value)
        with self._lock:
            setattr(getattr(self, target), attr, value)

    def set_name(self, value: str) -> None:
        self.set_field("name", value)

    def set_recent_position(self, value: str) -> None:
        self.set_field("recent_position", value)

    def set_background(self, value: str) -> None:
        self.set_field("background", value)

    def set_company_name(self, value: str) -> None:
        self.set_field("company_name", value)

    def set_target_position(self, value: str) -> None:
        self.set_field("target_position", value)

    def set_job_description(self, value: str) -> None:
        self.set_field("job_description", value)

    def set_length(self, value: Any) -> None:
        length = parse_length(value)
        with self._lock:
            self.config.length = length

    def set_style(self, value: Any) -> None:
        style = parse_style(value)
        with self._lock:
            self.config.style = style

    def update(self, values: Mapping[str, Any]) -> None:
        """Apply a form post: any subset of the six fields plus length/style.

        The selection values are validated before anything is written, so a
        bad length or style leaves the whole form unchanged.
        """
        length = parse_length(values["length"]) if "length" in values else None
        style = parse_style(values["style"]) if "style" in values else None
        unknown = [k for k in values if k not in FIELD_KEYS and k not in ("length", "style")]
        if unknown:
            raise KeyError(f"Unknown form field(s): {', '.join(sorted(unknown))}")
        with self._lock:
            for key, value in values.items():
                if key in FIELD_KEYS:
                    self.set_field(key, value)
            if length is not None:
                self.config.length = length
            if style is not None:
                self.config.style = style

    def inputs(self) -> InputData:
        with self._lock:
            return InputData.from_parts(self.profile, self.job)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def generate(self) -> bool:
        """Run one generation. Returns True when a result was stored."""
        with self._lock:
            if not self.profile.background.strip() or not self.job.job_description.strip():
                self.error = VALIDATION_MESSAGE
                self.error_kind = "validation"
                return False

            self._latest_token += 1
            token = self._latest_token
            self.error = ""
            self.error_kind = None
            self.result = ""
            self.is_generating = True
            inputs = InputData.from_parts(self.profile, self.job)
            config = GenerationConfig(self.config.length, self.config.style)

        text = ""
        error = ""
        kind: Optional[str] = None
        try:
            text = self._generate_fn(inputs, config)
        except GenerationError as e:
            error, kind = e.message, e.kind.value
        except Exception as e:
            logger.exception("Cover letter generation failed")
            error, kind = str(e) or UNEXPECTED_ERROR_MESSAGE, ErrorKind.UNKNOWN.value

        with self._lock:
            if token != self._latest_token:
                logger.info("Discarding superseded generation #{} (latest is #{})", token, self._latest_token)
                return False
            self.result = text
            self.error = error
            self.error_kind = kind
            self.is_generating = False

        if error:
            logger.warning("Generation #{} failed: {}", token, kind)
            return False
        logger.info("Generation #{} stored ({} chars)", token, len(text))
        return True

    def load_profile(self) -> None:
        """Restore the saved profile. Bad data is logged and ignored."""
        try:
            raw = self.profile_store.load()
        except Exception:
            logger.exception("Failed to read saved profile")
            return
        if not raw:
            return
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.error("Failed to parse saved profile: {}", e)
            return
        if not isinstance(data, dict):
            logger.error("Failed to parse saved profile: expected an object, got {}", type(data).__name__)
            return
        with self._lock:
            self.profile = ProfileFields.from_storage(data)
        logger.debug("Loaded saved profile")

    def save_profile(self) -> None:
        with self._lock:
            payload = json.dumps(self.profile.to_storage())
            self.profile_store.save(payload)
            self._saved_at = self._clock()
        logger.info("Profile saved")

    def clear_profile(self, confirmed: bool = False) -> bool:
        """Delete the saved profile and empty the three profile fields.

        Nothing happens unless the user confirmed.
        """
        if not confirmed:
            return False
        with self._lock:
            self.profile_store.clear()
            self.profile = ProfileFields()
            self._saved_at = None
        logger.info("Profile cleared")
        return True

    def copy_result(self) -> bool:
        with self._lock:
            if not self.result:
                return False
            self.clipboard.write(self.result)
            self._copied_at = self._clock()
        return True

    def export_pdf(self, output_path: str) -> bool:
        with self._lock:
            text = self.result
        if not text:
            with self._lock:
                self.error = NOTHING_TO_EXPORT_MESSAGE
                self.error_kind = "pdf"
            return False
        try:
            ok = self._pdf_exporter(text, str(output_path))
        except Exception:
            logger.exception("PDF renderer raised")
            ok = False
        if not ok:
            with self._lock:
                self.error = PDF_ERROR_MESSAGE
                self.error_kind = "pdf"
        return ok

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    def _flash_active(self, stamp: Optional[float]) -> bool:
        return stamp is not None and (self._clock() - stamp) < self.flash_seconds

    @property
    def copied(self) -> bool:
        return self._flash_active(self._copied_at)

    @property
    def profile_saved(self) -> bool:
        return self._flash_active(self._saved_at)

    @property
    def api_key_present(self) -> bool:
        return bool(self.credentials.resolve())

    @property
    def word_count(self) -> int:
        return len(self.result.split())

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "fields": InputData.from_parts(self.profile, self.job).to_dict(),
                "config": self.config.to_dict(),
                "result": self.result,
                "word_count": self.word_count,
                "error": self.error,
                "error_kind": self.error_kind,
                "is_generating": self.is_generating,
                "copied": self.copied,
                "profile_saved": self.profile_saved,
                "api_key_present": self.api_key_present,
            }
