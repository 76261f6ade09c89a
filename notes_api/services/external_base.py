"""
Notes API — Base Class for Outbound Service Clients
====================================================

What:  Shared plumbing for the clients that call the login service and the
       content service.
How:   Subclasses name their service and call `_post()`, which checks the
       base URL is configured, sends the request on the shared
       httpx.AsyncClient, and converts transport failures.
Who:   Inherited by TokenValidator and ContentUploader.

Contract for subclasses:
    - A missing base URL raises ConfigMissingError before any I/O
    - httpx.RequestError (connect, read, timeout, ...) and an unparseable
      base URL (httpx.InvalidURL) raise TransportError
    - Status handling is left to the subclass; nothing is retried
"""

import logging
from typing import Mapping, Optional

import httpx

from notes_api.exceptions import ConfigMissingError, TransportError

logger = logging.getLogger(__name__)


class ExternalServiceClient:
    """
    Client for one external HTTP service.

    The httpx.AsyncClient is shared and never mutated after construction, so
    one instance safely serves concurrent requests. Per-request data (such as
    the caller's bearer token) is passed as call arguments.
    """

    #: Human-readable service name used in error messages and logs
    service_name = "external service"

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self._client = client
        self.base_url = base_url.rstrip("/")

    async def _post(
        self,
        path: str,
        headers: Mapping[str, str],
        content: Optional[bytes] = None,
    ) -> httpx.Response:
        """
        POST to `{base_url}{path}` and return the fully read response.

        Raises:
            ConfigMissingError: base URL not configured
            TransportError:     request could not be sent or answer not received
        """
        if not self.base_url:
            raise ConfigMissingError(message=f"{self.service_name} url cannot be empty")

        url = f"{self.base_url}{path}"
        try:
            response = await self._client.post(url, headers=dict(headers), content=content)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            # InvalidURL is raised while building the request, before any I/O
            logger.warning("%s request to %s failed: %s", self.service_name, url, e)
            raise TransportError(
                message=str(e) or f"{self.service_name} request failed",
                context={"url": url, "error_type": type(e).__name__},
            )

        logger.debug("%s responded %d for POST %s", self.service_name, response.status_code, url)
        return response
