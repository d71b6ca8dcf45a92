from .authenticator_alist import AListAuthenticator
from .uploader_stream import StreamUploader

__all__ = [
    "AListAuthenticator",
    "StreamUploader",
]
