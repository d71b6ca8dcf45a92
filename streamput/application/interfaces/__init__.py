from .authenticator import IAuthenticator
from .uploader import IStreamUploader

__all__ = [
    "IAuthenticator",
    "IStreamUploader",
]
