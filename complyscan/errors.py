"""Exception hierarchy for a scan.

Every terminal failure is a :class:`ScanError` carrying a short machine code
and a human-readable message.  ``to_dict`` is the only shape that crosses the
API / CLI boundary.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ScanError(Exception):
    """Base class for all user-facing scan failures."""

    code = "scan_failed"

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, str]:
        return {"error": self.code, "message": self.message}


class InputError(ScanError):
    """The domain string failed validation; no network call was made."""

    code = "invalid_domain"


class FetchErrorKind(str, Enum):
    NOT_FOUND = "not_found"                    # DNS resolution failure
    TIMEOUT = "timeout"
    CONNECTION_REFUSED = "connection_refused"
    FORBIDDEN = "forbidden"                    # 403
    NOT_FOUND_PAGE = "not_found_page"          # 404
    INVALID_CONTENT = "invalid_content"        # short / non-text / empty page
    GENERIC = "generic"


class FetchError(ScanError):
    """A single candidate URL could not be used.

    Resolvers recover from this locally by moving to the next candidate.
    """

    code = "fetch_failed"

    def __init__(
        self,
        kind: FetchErrorKind,
        url: str,
        detail: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.url = url
        self.detail = detail or kind.value
        self.status_code = status_code
        super().__init__(f"{url}: {self.detail}")


# Messages keyed by the last failure kind seen for an unreachable homepage.
_UNREACHABLE_MESSAGES: dict[FetchErrorKind, tuple[str, str]] = {
    FetchErrorKind.NOT_FOUND: (
        "domain_not_found",
        'Domain "{domain}" not found. Please check the domain name.',
    ),
    FetchErrorKind.TIMEOUT: (
        "timeout",
        'Connection to "{domain}" timed out. The site may be slow or blocking requests.',
    ),
    FetchErrorKind.CONNECTION_REFUSED: (
        "connection_refused",
        'Connection refused by "{domain}". The site may be down or blocking requests.',
    ),
    FetchErrorKind.FORBIDDEN: (
        "forbidden",
        'Access forbidden to "{domain}". The site is blocking automated requests.',
    ),
    FetchErrorKind.NOT_FOUND_PAGE: (
        "page_not_found",
        'Page not found on "{domain}". Please check the URL.',
    ),
}


class HomepageUnreachableError(ScanError):
    """Every homepage candidate URL failed."""

    def __init__(
        self,
        domain: str,
        last_error: Optional[FetchError],
        attempts: Optional[list] = None,
    ) -> None:
        self.domain = domain
        self.last_error = last_error
        # FetchAttempt records, one per candidate URL, in order.
        self.attempts = list(attempts or [])
        kind = last_error.kind if last_error is not None else FetchErrorKind.GENERIC
        if kind in _UNREACHABLE_MESSAGES:
            code, template = _UNREACHABLE_MESSAGES[kind]
            message = template.format(domain=domain)
        else:
            code = "fetch_failed"
            detail = last_error.detail if last_error is not None else "Unknown error"
            message = f'Could not fetch "{domain}": {detail}'
        super().__init__(message, code=code)


class InsufficientContentError(ScanError):
    """The homepage was fetched but yielded too little readable text."""

    code = "insufficient_content"

    def __init__(self, domain: str) -> None:
        self.domain = domain
        super().__init__(
            f'Could not extract meaningful text content from "{domain}". '
            "The site may require JavaScript to render content or is blocking "
            "automated access."
        )


class ScanTimeoutError(ScanError):
    """The caller-supplied scan deadline expired."""

    code = "timeout"

    def __init__(self, domain: str, deadline: float) -> None:
        self.domain = domain
        self.deadline = deadline
        super().__init__(
            f'Scanning "{domain}" did not finish within {deadline:g} seconds.'
        )


class AnalyzerError(ScanError):
    """The analyzer failed (bad response shape, timeout, quota, missing key)."""

    code = "analysis_failed"
