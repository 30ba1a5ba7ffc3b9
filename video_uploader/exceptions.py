"""Errors raised while uploading a single file.

Everything below ``UploadError`` fails the current file only; the batch runner
reports it and moves on to the next file.
"""


class UploadError(Exception):
    """Base class for upload failures"""


class StoreError(UploadError):
    """The local uploads file could not be read or written"""


class RemoteError(UploadError):
    """The remote answered with a status we do not retry"""

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self):
        message = super().__str__()
        if self.status_code is not None:
            message = f"{message} (status {self.status_code}): {self.body}"
        return message


class RetryBudgetExhaustedError(UploadError):
    """Every allowed attempt was rate limited"""


class OffsetUnavailableError(RetryBudgetExhaustedError):
    """The remote never reported how many bytes it holds"""


class TransferStalledError(UploadError):
    """The remote offset stopped advancing"""


class OrphanedSessionError(UploadError):
    """A remote session exists that the local store does not know about"""

    def __init__(self, message, session_uri, resource_uri):
        super().__init__(message)
        self.session_uri = session_uri
        self.resource_uri = resource_uri

    def __str__(self):
        return (f"{super().__str__()} "
                f"(session_uri={self.session_uri}, resource_uri={self.resource_uri})")


class UploadFailedError(UploadError):
    """Raised to the caller when a file could not be uploaded"""

    def __init__(self, identifier, cause):
        super().__init__(f"upload of {identifier} failed: {cause}")
        self.identifier = identifier
        self.cause = cause
