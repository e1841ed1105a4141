import logging
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .signing import sign_token
from .types import (
    AcceptInvitationsRequest,
    GroupInput,
    IdentifierInput,
    Invitation,
    InvitationTarget,
    VortexApiError,
    VortexTransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.vortexsoftware.com"
DEFAULT_TIMEOUT = httpx.Timeout(10.0)
SDK_NAME = "vortex-client"


def _get_version() -> str:
    """Lazy import of version to avoid circular import"""
    from . import __version__

    return __version__


def _segment(value: str) -> str:
    return quote(value, safe="")


class VortexClient:
    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        *,
        timeout: Union[httpx.Timeout, float, None] = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize Vortex client

        Args:
            api_key: Your Vortex API key
            base_url: Base URL for Vortex API (default: https://api.vortexsoftware.com)
            timeout: Timeout applied to every request
            http_client: Optional pre-configured httpx.Client; it is left open on close()
        """
        self._api_key = api_key
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    def generate_jwt(
        self,
        user_id: str,
        identifiers: Sequence[Union[IdentifierInput, Dict[str, Any]]],
        groups: Sequence[Union[GroupInput, Dict[str, Any]]],
        role: Optional[str] = None,
    ) -> str:
        """
        Generate a JWT token for a user

        No network call is made; the token is signed locally with a key
        derived from the API key.

        Args:
            user_id: Your internal user ID
            identifiers: List of identifiers, e.g. {'type': 'email', 'value': 'user@example.com'}
            groups: List of groups, e.g. {'type': 'workspace', 'groupId': 'ws-1', 'name': 'Main'}
            role: Optional user role

        Returns:
            JWT token string

        Raises:
            InvalidApiKeyError: If API key format is invalid

        Example:
            jwt = vortex.generate_jwt(
                user_id="user-123",
                identifiers=[{"type": "email", "value": "user@example.com"}],
                groups=[{"type": "team", "groupId": "team-1", "name": "Engineering"}],
                role="admin",
            )
        """
        return sign_token(self._api_key, user_id, identifiers, groups, role)

    def _send(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
    ) -> httpx.Response:
        """
        Make an API request to Vortex

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            data: Request body data
            params: Query parameters

        Returns:
            The successful HTTP response

        Raises:
            VortexApiError: If the API responds with a non-2xx status
            VortexTransportError: If the request could not be sent
        """
        url = f"{self._base_url}{endpoint}"
        headers = {
            "x-api-key": self._api_key,
            "Content-Type": "application/json",
            "User-Agent": f"{SDK_NAME}/{_get_version()}",
            "x-vortex-sdk-name": SDK_NAME,
            "x-vortex-sdk-version": _get_version(),
        }

        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(
                method=method, url=url, json=data, params=params, headers=headers
            )
        except httpx.RequestError as e:
            raise VortexTransportError(f"Request failed: {str(e)}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)

        if not response.is_success:
            error_message = f"API request failed with status {response.status_code}"
            try:
                error_data = response.json()
            except ValueError:
                error_data = None
            if isinstance(error_data, dict) and isinstance(error_data.get("error"), str):
                error_message = error_data["error"]

            raise VortexApiError(error_message, response.status_code, response.text)

        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        # Handle empty responses (e.g., DELETE requests may return 204 or empty 200)
        if response.status_code == 204 or not response.content.strip():
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise VortexApiError(
                "API returned a non-JSON response", response.status_code, response.text
            ) from e

    def _vortex_api_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
    ) -> Any:
        return self._decode(self._send(method, endpoint, data=data, params=params))

    def _invitation(self, method: str, endpoint: str) -> Invitation:
        response = self._send(method, endpoint)
        try:
            return Invitation.model_validate(self._decode(response))
        except ValidationError as e:
            raise VortexApiError(
                f"Unexpected invitation payload: {e}", response.status_code, response.text
            ) from e

    def _invitation_list(
        self, endpoint: str, params: Optional[Dict] = None
    ) -> List[Invitation]:
        response = self._send("GET", endpoint, params=params)
        body = self._decode(response)
        if isinstance(body, dict):
            body = body.get("invitations") or []
        if not isinstance(body, list):
            raise VortexApiError(
                "Unexpected invitation list payload", response.status_code, response.text
            )
        try:
            return [Invitation.model_validate(inv) for inv in body]
        except ValidationError as e:
            raise VortexApiError(
                f"Unexpected invitation payload: {e}", response.status_code, response.text
            ) from e

    def get_invitations_by_target(
        self, target_type: str, target_value: str
    ) -> List[Invitation]:
        """
        Get invitations for a specific target

        Args:
            target_type: Type of target (e.g. 'email' or 'sms')
            target_value: Target value (email address or phone number)

        Returns:
            List of invitations
        """
        params = {"targetType": target_type, "targetValue": target_value}
        return self._invitation_list("/api/v1/invitations", params=params)

    def get_invitation(self, invitation_id: str) -> Invitation:
        """
        Get a specific invitation by ID

        Args:
            invitation_id: Invitation ID

        Returns:
            Invitation object
        """
        return self._invitation("GET", f"/api/v1/invitations/{_segment(invitation_id)}")

    def revoke_invitation(self, invitation_id: str) -> Dict:
        """
        Revoke (delete) an invitation

        Args:
            invitation_id: Invitation ID to revoke

        Returns:
            API response
        """
        return self._vortex_api_request(
            "DELETE", f"/api/v1/invitations/{_segment(invitation_id)}"
        )

    def accept_invitations(
        self,
        invitation_ids: List[str],
        target: Union[InvitationTarget, Dict[str, str]],
    ) -> Dict:
        """
        Accept multiple invitations for a target

        Args:
            invitation_ids: List of invitation IDs to accept
            target: Target with 'type' and 'value'

        Returns:
            API response

        Example:
            result = client.accept_invitations(
                ["inv-123", "inv-456"], {"type": "email", "value": "user@example.com"}
            )
        """
        request = AcceptInvitationsRequest(invitation_ids=invitation_ids, target=target)

        return self._vortex_api_request(
            "POST", "/api/v1/invitations/accept", data=request.model_dump(by_alias=True)
        )

    def accept_invitation(
        self,
        invitation_id: str,
        target: Union[InvitationTarget, Dict[str, str]],
    ) -> Dict:
        """Accept a single invitation for a target"""
        return self.accept_invitations([invitation_id], target)

    def get_invitations_by_group(
        self, group_type: str, group_id: str
    ) -> List[Invitation]:
        """
        Get invitations for a specific group

        Args:
            group_type: Type of group
            group_id: Group ID

        Returns:
            List of invitations
        """
        return self._invitation_list(
            f"/api/v1/invitations/by-group/{_segment(group_type)}/{_segment(group_id)}"
        )

    def delete_invitations_by_group(self, group_type: str, group_id: str) -> Dict:
        """
        Delete all invitations for a specific group

        Args:
            group_type: Type of group
            group_id: Group ID

        Returns:
            API response
        """
        return self._vortex_api_request(
            "DELETE",
            f"/api/v1/invitations/by-group/{_segment(group_type)}/{_segment(group_id)}",
        )

    def reinvite(self, invitation_id: str) -> Invitation:
        """
        Send an invitation again

        Args:
            invitation_id: Invitation ID to reinvite

        Returns:
            Updated invitation object
        """
        return self._invitation(
            "POST", f"/api/v1/invitations/{_segment(invitation_id)}/reinvite"
        )

    def close(self) -> None:
        """Close the HTTP client"""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "VortexClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
