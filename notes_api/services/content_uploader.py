"""
Notes API — Content Service Uploader
=====================================

What:  Forwards an already-encoded multipart/form-data body to the external
       content service.
How:   POST {CONTENT_SERVICE_URL}/upload with
           Authorization: Bearer <caller's token>
           Content-Type:  multipart/form-data; boundary=...
       and the multipart bytes as the body. 200 means accepted.
Who:   Called by NoteService.send_to_content_service().

The bearer token is an argument of send(), never a field on the uploader:
the uploader is shared across concurrent requests.
"""

import logging

from notes_api.exceptions import UpstreamError
from notes_api.services.external_base import ExternalServiceClient

logger = logging.getLogger(__name__)


class ContentUploader(ExternalServiceClient):
    """
    Uploads multipart bodies to the content service.

    Raises (from send):
        ConfigMissingError: CONTENT_SERVICE_URL is empty
        TransportError:     the content service could not be reached
        UpstreamError:      the content service answered with a non-200 status
    """

    service_name = "content service"

    async def send(self, body: bytes, content_type: str, token: str) -> None:
        response = await self._post(
            "/upload",
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": content_type,
            },
            content=body,
        )
        if response.status_code != 200:
            raise UpstreamError(
                message=f"non-200 status code received: {response.status_code}",
                status=response.status_code,
            )
        logger.info("Uploaded %d bytes to the content service", len(body))
