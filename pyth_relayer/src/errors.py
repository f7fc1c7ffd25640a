"""Exception hierarchy for the relayer.

Chain and HTTP layers raise these; public operations convert them into
failure results, so only unexpected exceptions reach the drivers.
"""


class RelayerError(Exception):
    """Base exception for relayer errors."""

    pass


class ConfigError(RelayerError):
    """Raised when configuration is missing or invalid (e.g., no signing key)."""

    pass


class FetchError(RelayerError):
    """Raised when the attestation service is unreachable or returns bad data."""

    pass


class FetchHTTPError(FetchError):
    """Raised when the attestation service answers with a non-2xx status.

    :ivar status_code: HTTP status code from the failed request.
    """

    def __init__(self, status_code: int, message: str):
        """Initialize the HTTP error.

        :param status_code: HTTP status code.
        :param message: Error message from response.
        """
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {message}")


class FeeQueryError(RelayerError):
    """Raised when the update fee cannot be quoted."""

    pass


class SubmissionError(RelayerError):
    """Raised when the price update transaction fails or is not confirmed."""

    pass


class QueryError(RelayerError):
    """Raised when a price read against the oracle fails."""

    pass
