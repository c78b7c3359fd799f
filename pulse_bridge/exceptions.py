# pulse_bridge/exceptions.py
"""Exception hierarchy for pulse-bridge."""


class PulseBridgeError(Exception):
    """Base exception for all pulse-bridge errors."""
    pass


class CredentialError(PulseBridgeError):
    """Raised when the push service credential is missing or malformed."""
    pass


class MediaScanError(PulseBridgeError):
    """Raised when the media indexing facility rejects a scan request."""
    pass


class ResultAlreadySubmittedError(PulseBridgeError):
    """Raised when a pending result is resolved more than once."""
    pass
