"""
Notes API — Login Service Token Validator
==========================================

What:  Asks the external login service whether a bearer token is valid.
How:   POST {LOGIN_SERVICE_URL}/token with `Authorization: Bearer <token>`
       and an empty body. 200 means valid; any other status means invalid.
Who:   Called by NoteService.validate_token() from the authorization
       dependency, once per authorized request.
"""

from notes_api.exceptions import UnauthorizedError
from notes_api.services.external_base import ExternalServiceClient


class TokenValidator(ExternalServiceClient):
    """
    Validates bearer tokens against the login service.

    Raises (from validate):
        ConfigMissingError: LOGIN_SERVICE_URL is empty
        TransportError:     the login service could not be reached
        UnauthorizedError:  the login service answered with a non-200 status
    """

    service_name = "login service"

    async def validate(self, token: str) -> None:
        response = await self._post(
            "/token",
            headers={"Authorization": f"Bearer {token}"},
        )
        if response.status_code != 200:
            raise UnauthorizedError(
                message=f"non-200 status code received: {response.status_code}",
                context={"upstream_status": response.status_code},
            )
