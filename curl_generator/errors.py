from __future__ import annotations

from typing import Iterable, List


class ValidationError(ValueError):
    """Raised when a value cannot be read as a request capture.

    Carries one human-readable message per violated rule.
    """

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = list(messages) or ["Invalid request capture."]
        super().__init__("\n".join(self.messages))

    def __str__(self) -> str:
        return "Invalid JSON format:\n" + "\n".join(self.messages)


class ReleaseFileError(ValueError):
    pass
