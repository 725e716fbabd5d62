"""Custom exceptions for the sales browser.

All data-access failures are expressed with these types so the browser can
surface a single error state regardless of which collaborator failed.
"""


class SalesViewError(Exception):
    """Base exception for all sales browser errors."""


class CredentialUnavailable(SalesViewError):
    """Raised when no access credential can be obtained yet.

    Recoverable: loads issued while no credential is available are deferred,
    not failed.
    """


class TransportFailure(SalesViewError):
    """Raised when the data source cannot be reached or answers with an error status."""


class DecodingFailure(SalesViewError):
    """Raised when a response does not match the expected shape."""
