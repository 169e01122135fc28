"""Failure states of the NCM retrieval pipeline.

Fatal errors (login, transport during login, unreadable inventory) abort the
run before any node is processed.  The per-node errors only cost that node.
"""


class NcmDumpError(Exception):
    """Base class for every error raised by ncm_dump."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message, status_code, payload)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self):
        if self.status_code is None:
            return str(self.message)
        return f"{self.message} (HTTP {self.status_code})"


class AuthenticationError(NcmDumpError):
    """The console did not hand out an auth cookie for the supplied credentials."""


class OrionConnectionError(NcmDumpError):
    """The console could not be reached at all."""


class InventoryError(NcmDumpError):
    """The node list response could not be decoded."""


class ResponseShapeError(NcmDumpError):
    """A per-node response did not carry the value we need."""


class NoConfigFileError(NcmDumpError):
    """The node has no stored configuration to point at."""
