from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import ValidationError


@dataclass(frozen=True)
class ExtractedRequest:
    """Canonical request record built from one capture.

    `body` is None when the capture carries no body.
    """

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None

    @property
    def has_body(self) -> bool:
        return self.body is not None


@dataclass(frozen=True)
class RenderedCommand:
    pretty: str
    single_line: str


@dataclass(frozen=True)
class ExtractionResult:
    success: bool
    request: Optional[ExtractedRequest] = None
    error: Optional[ValidationError] = None

    @classmethod
    def ok(cls, request: ExtractedRequest) -> "ExtractionResult":
        return cls(success=True, request=request)

    @classmethod
    def failed(cls, error: ValidationError) -> "ExtractionResult":
        return cls(success=False, error=error)
