"""
Custom error types for the upload client
"""

from typing import Optional


class StreamPutError(Exception):
    """Base exception for every failure the client reports to the operator"""

    default_code = "STREAMPUT_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code or self.default_code
        super().__init__(self.message)


class MalformedUrlError(StreamPutError):
    """Exception raised when the destination URL has no usable scheme/host/port"""

    default_code = "MALFORMED_URL"

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TransportError(StreamPutError):
    """Exception raised on network-level failures (refused, DNS, TLS, timeout)

    Args:
        message (str): Error message
        url (Optional[str]): Endpoint that was being contacted
    Example:
        raise TransportError("Connection refused", url="http://host:5244/api/fs/put")
    """

    default_code = "TRANSPORT_ERROR"

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ProtocolError(StreamPutError):
    """Exception raised when a response body does not have the expected shape"""

    default_code = "PROTOCOL_ERROR"

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message)
        self.body = body


class AuthRejectedError(StreamPutError):
    """Exception raised when the service answers a login without a token"""

    default_code = "AUTH_REJECTED"

    def __init__(
        self,
        message: str,
        server_code: Optional[int] = None,
        server_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.server_code = server_code
        self.server_message = server_message


class FileOpenError(StreamPutError):
    """Exception raised when the local file cannot be opened for reading"""

    default_code = "FILE_OPEN_ERROR"

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message)
        self.file_path = file_path


class FileReadError(FileOpenError):
    """Exception raised when reading the local file fails mid-transfer"""

    default_code = "FILE_READ_ERROR"
