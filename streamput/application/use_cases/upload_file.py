import logging

from streamput.application.interfaces import IAuthenticator, IStreamUploader
from streamput.core.pyd_schemas import Credentials, Destination, UploadResult

logger = logging.getLogger(__name__)


class UploadFileUseCase:
    """Log in, then stream one local file to the destination URL.

    The two steps are strictly sequential: the upload is never attempted
    (and the local file never opened) unless login returned a token.
    """

    def __init__(self, authenticator: IAuthenticator, uploader: IStreamUploader) -> None:
        self._authenticator = authenticator
        self._uploader = uploader

    async def execute(
        self, credentials: Credentials, local_path: str, destination_url: str
    ) -> UploadResult:
        destination = Destination.from_url(destination_url)
        logger.debug(
            "Destination base=%s path=%s",
            destination.base_url,
            destination.remote_file_path,
        )

        token = await self._authenticator.login(destination.base_url, credentials)
        text = await self._uploader.upload(destination, token, local_path)

        return UploadResult(destination=destination, response_text=text)
