"""Data Transfer Objects — Pydantic models for API boundaries.

DTOs handle serialisation, validation, and documentation.  They live in the
application layer because they are *not* domain objects — they adapt between
the external world and the domain.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from ai_report import __version__
from ai_report.domain.entities import AllFailed, GenerationRequest, Success
from ai_report.domain.exceptions import ValidationError

MISSING_PROMPT = "Missing 'prompt' string in body"


# ═══════════════════════════════════════════════════════════════
#  Common
# ═══════════════════════════════════════════════════════════════
class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    environment: str = "development"
    providers: dict[str, str] = Field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════
#  AI Report
# ═══════════════════════════════════════════════════════════════
class ReportRequest(BaseModel):
    prompt: StrictStr = Field(..., min_length=1)


class ReportResponse(BaseModel):
    provider: str
    text: str

    @classmethod
    def from_success(cls, result: Success) -> ReportResponse:
        return cls(provider=result.provider.value, text=result.text)


class AttemptOut(BaseModel):
    provider: str
    error: str


class AllFailedResponse(BaseModel):
    error: str = "All providers failed"
    attempts: list[AttemptOut]

    @classmethod
    def from_result(cls, result: AllFailed) -> AllFailedResponse:
        return cls(
            attempts=[
                AttemptOut(provider=f.provider.value, error=f.reason)
                for f in result.attempts
            ]
        )


def parse_report_request(payload: Any) -> GenerationRequest:
    """Validate a decoded JSON body into a GenerationRequest."""
    if not isinstance(payload, dict):
        raise ValidationError(MISSING_PROMPT)
    try:
        body = ReportRequest.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(MISSING_PROMPT) from exc
    return GenerationRequest(prompt=body.prompt)
