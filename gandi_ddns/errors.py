"""
Exception types raised by the synchronizer.

Only conditions that should end a run are exceptions. An absent record and a
write the provider did not acknowledge with 201 are logged outcomes instead.
"""

from typing import Optional


class DDNSError(Exception):
    """Base class for every error the synchronizer raises on purpose"""


class ConfigurationError(DDNSError):
    """The configuration file or environment is missing, unreadable or invalid"""


class HTTPStatusError(DDNSError):
    """An HTTP exchange failed, optionally with the status code that was returned"""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DiscoveryError(HTTPStatusError):
    """The public IP echo service was unreachable or gave no usable answer"""


class ReadError(HTTPStatusError):
    """A DNS record could not be read from the provider"""


class WriteTransportError(HTTPStatusError):
    """A DNS record update failed before the provider could answer it"""
