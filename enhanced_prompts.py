"""
Cover Letter Generation Prompt
One prompt per request: applicant, target role, length and tone, plus structure rules
"""
import re
import textwrap

from letter_types import GenerationConfig, InputData

# Words that mark a recipient as an organisation rather than a person
_ORG_MARKERS = {
    "inc", "inc.", "llc", "ltd", "ltd.", "limited", "corp", "corp.", "corporation",
    "company", "co", "co.", "group", "gmbh", "plc", "ag", "sa", "labs", "technologies",
    "solutions", "systems", "partners", "university", "college", "institute",
    "agency", "bank", "foundation", "team", "department", "hospital", "school",
    "studio", "studios", "holdings", "ventures", "global", "international",
}
_HONORIFICS = ("mr", "mrs", "ms", "miss", "mx", "dr", "prof")
_NAME_WORD = re.compile(r"^[A-Z][a-z]*(?:['\-][A-Za-z][a-z]+|[A-Z][a-z]+)*\.?$")


def recipient_kind(recipient: str) -> str:
    """Guess whether the recipient field names a person or an organisation.

    Returns "person", "organization" or "unknown" (empty field).
    """
    text = (recipient or "").strip()
    if not text:
        return "unknown"
    words = text.split()
    first = words[0].lower().rstrip(".")
    if first in _HONORIFICS:
        return "person"
    if any(w.lower().strip(",") in _ORG_MARKERS for w in words):
        return "organization"
    # "Jane Doe", "Jean-Luc O'Neil", "Ronald McDonald": two or three capitalised name-like words
    if 2 <= len(words) <= 3 and all(_NAME_WORD.match(w) for w in words):
        return "person"
    return "organization"


def salutation_instruction(recipient: str) -> str:
    kind = recipient_kind(recipient)
    if kind == "person":
        return (
            f'The recipient "{recipient.strip()}" appears to be a person: open with '
            f'"Dear {recipient.strip()}," (add a title only if one is given).'
        )
    if kind == "organization":
        return (
            f'The recipient "{recipient.strip()}" appears to be an organization: open with '
            f'"Dear {recipient.strip()} Hiring Team," or "Dear Hiring Manager,".'
        )
    return 'No recipient is given: open with "Dear Hiring Manager,".'


def sign_off_instruction(name: str) -> str:
    name = (name or "").strip()
    if name:
        return f'Close with "Sincerely," followed by the applicant\'s name, {name}, on its own line.'
    return 'Close with "Sincerely," and leave no placeholder for a name.'


COVER_LETTER_PROMPT = textwrap.dedent("""
You are an expert career consultant. Write a cover letter for the applicant below.

**Applicant:**
Name: {name}
Most Recent Position: {recent_position}
Background: {background}

**Target:**
Company / Recipient: {company_name}
Position: {target_position}
Job Description:
{job_description}

**Constraints:**
- Length: approximately {word_count} words.
- Tone: {tone}.

**Structure:**
1. Salutation: {salutation}
2. Opening paragraph: name the position and give a specific reason for interest in this company.
3. Middle paragraph(s): connect two or three concrete points from the background to requirements in the job description.
4. Closing paragraph: restate fit, invite a conversation, thank the reader.
5. Sign-off: {sign_off}

**Output Format:**
Use standard business-letter paragraphing separated by blank lines.
Output ONLY the cover letter text. No preamble, no commentary, no markdown, no placeholders in brackets.
""").strip()


def _or_unspecified(value: str) -> str:
    value = (value or "").strip()
    return value or "Not specified"


def build_cover_letter_prompt(inputs: InputData, config: GenerationConfig) -> str:
    """Fill the cover letter template from the form fields and the length/style selection."""
    return COVER_LETTER_PROMPT.format(
        name=_or_unspecified(inputs.name),
        recent_position=_or_unspecified(inputs.recent_position),
        background=inputs.background.strip(),
        company_name=_or_unspecified(inputs.company_name),
        target_position=_or_unspecified(inputs.target_position),
        job_description=inputs.job_description.strip(),
        word_count=config.length.words,
        tone=config.style.value,
        salutation=salutation_instruction(inputs.company_name),
        sign_off=sign_off_instruction(inputs.name),
    )
