"""Domain-specific exception hierarchy.

All exceptions inherit from ``DomainError`` so callers can catch the entire
family in one clause while still discriminating on subclass.  Provider
errors never leave the adapter that raised them: the adapter wrapper turns
them into a ``Failure`` outcome carrying ``reason``.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for all domain-layer errors."""

    def __init__(self, message: str, *, code: str = "DOMAIN_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


# ── Validation ───────────────────────────────────────────────
class ValidationError(DomainError):
    """Inbound request failed validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="VALIDATION_ERROR")


# ── Providers ────────────────────────────────────────────────
class ProviderError(DomainError):
    """Base for failures local to a single provider attempt.

    ``reason`` is the diagnostic reported back to the caller.
    """

    def __init__(self, reason: str, *, code: str = "PROVIDER_ERROR") -> None:
        self.reason = reason
        super().__init__(reason, code=code)


class ConfigurationMissingError(ProviderError):
    def __init__(self, credential_name: str) -> None:
        self.credential_name = credential_name
        super().__init__(
            f"credential not configured: {credential_name}",
            code="CONFIGURATION_MISSING",
        )


class TransportError(ProviderError):
    def __init__(self, reason: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(reason, code="TRANSPORT_ERROR")

    @classmethod
    def from_status(cls, status_code: int) -> TransportError:
        return cls(f"HTTP {status_code}", status_code=status_code)


class MalformedResponseError(ProviderError):
    def __init__(self, reason: str = "empty response") -> None:
        super().__init__(reason, code="MALFORMED_RESPONSE")


class AsyncTimeoutError(ProviderError):
    def __init__(self, polls: int) -> None:
        self.polls = polls
        super().__init__("timeout", code="ASYNC_TIMEOUT")


class AsyncTerminalFailureError(ProviderError):
    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(status, code="ASYNC_TERMINAL_FAILURE")
