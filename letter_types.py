"""
Form data records for the cover letter generator.
Field names on the wire (storage, HTTP) stay camelCase; attributes are snake_case.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict


class LetterLength(str, Enum):
    VERY_SHORT = "50"
    SHORT = "100"
    STANDARD = "200"
    FULL = "500"

    @property
    def words(self) -> int:
        return int(self.value)


class LetterStyle(str, Enum):
    PROFESSIONAL = "Professional"
    IMPACT = "Impact-Oriented"
    STORY = "Storytelling"
    PASSIONATE = "Passionate"
    CREATIVE = "Creative & Lively"


def parse_length(value: Any) -> LetterLength:
    """Accept 200, "200" or LetterLength.STANDARD."""
    if isinstance(value, LetterLength):
        return value
    try:
        return LetterLength(str(value).strip())
    except ValueError:
        allowed = ", ".join(item.value for item in LetterLength)
        raise ValueError(f"Unsupported letter length {value!r} (expected one of {allowed})") from None


def parse_style(value: Any) -> LetterStyle:
    if isinstance(value, LetterStyle):
        return value
    try:
        return LetterStyle(str(value).strip())
    except ValueError:
        allowed = ", ".join(item.value for item in LetterStyle)
        raise ValueError(f"Unsupported letter style {value!r} (expected one of {allowed})") from None


# camelCase wire key -> attribute name
PROFILE_KEYS = {
    "name": "name",
    "recentPosition": "recent_position",
    "background": "background",
}
JOB_KEYS = {
    "companyName": "company_name",
    "targetPosition": "target_position",
    "jobDescription": "job_description",
}
FIELD_KEYS = {**PROFILE_KEYS, **JOB_KEYS}


@dataclass
class ProfileFields:
    """The reusable part of the form, persisted between sessions."""
    name: str = ""
    recent_position: str = ""
    background: str = ""

    def to_storage(self) -> Dict[str, str]:
        return {wire: getattr(self, attr) for wire, attr in PROFILE_KEYS.items()}

    @classmethod
    def from_storage(cls, data: Dict[str, Any]) -> "ProfileFields":
        values = {}
        for wire, attr in PROFILE_KEYS.items():
            raw = data.get(wire)
            values[attr] = raw if isinstance(raw, str) else ""
        return cls(**values)


@dataclass
class JobFields:
    company_name: str = ""
    target_position: str = ""
    job_description: str = ""


@dataclass
class InputData:
    """All six text fields, as handed to the generation client."""
    name: str = ""
    recent_position: str = ""
    background: str = ""
    company_name: str = ""
    target_position: str = ""
    job_description: str = ""

    @classmethod
    def from_parts(cls, profile: ProfileFields, job: JobFields) -> "InputData":
        return cls(**asdict(profile), **asdict(job))

    def to_dict(self) -> Dict[str, str]:
        return {wire: getattr(self, attr) for wire, attr in FIELD_KEYS.items()}


@dataclass
class GenerationConfig:
    length: LetterLength = field(default=LetterLength.STANDARD)
    style: LetterStyle = field(default=LetterStyle.PROFESSIONAL)

    def to_dict(self) -> Dict[str, str]:
        return {"length": self.length.value, "style": self.style.value}
