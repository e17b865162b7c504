"""
Clipboard port.

The server cannot reach the user's clipboard, so the web app uses a relay:
copy_result() records the text here and the page writes it with
navigator.clipboard once the /api/copy response arrives.
"""
from typing import Optional, Protocol


class Clipboard(Protocol):
    def write(self, text: str) -> None:
        ...


class BrowserClipboard:
    """Holds the most recent copy so the web layer can hand it to the browser."""

    def __init__(self) -> None:
        self.text: Optional[str] = None

    def write(self, text: str) -> None:
        self.text = text

    def take(self) -> Optional[str]:
        text, self.text = self.text, None
        return text
