from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IdentifierInput(BaseModel):
    """Identifier structure for JWT generation (e.g. email, sms)"""
    type: str
    value: str


class GroupInput(BaseModel):
    """Group structure for JWT generation (input)"""
    model_config = ConfigDict(populate_by_name=True)

    type: str
    id: Optional[str] = None  # Legacy field (deprecated, use groupId)
    group_id: Optional[str] = Field(None, alias="groupId")  # Preferred: Customer's group ID
    name: str

    @property
    def uses_legacy_id(self) -> bool:
        return self.id is not None and self.group_id is None


class InvitationTarget(BaseModel):
    type: str
    value: str


class _ApiRecord(BaseModel):
    # Remote records are passed through: camelCase on the wire, unknown keys kept
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class InvitationTargetRecord(_ApiRecord):
    """Target as returned by the API (fields may be missing or null)"""
    type: Optional[str] = None
    value: Optional[str] = None


class InvitationGroup(_ApiRecord):
    """
    Invitation group from API responses
    This matches the MemberGroups table structure from the API
    """
    id: Optional[str] = None  # Vortex internal UUID
    account_id: Optional[str] = None  # Vortex account ID
    group_id: Optional[str] = None  # Customer's group ID
    type: Optional[str] = None  # Group type (e.g., "workspace", "team")
    name: Optional[str] = None
    created_at: Optional[str] = None  # ISO 8601 timestamp


class InvitationAcceptance(_ApiRecord):
    id: Optional[str] = None
    account_id: Optional[str] = None
    accepted_at: Optional[str] = None
    target: Optional[InvitationTargetRecord] = None


class Invitation(_ApiRecord):
    id: Optional[str] = None
    account_id: Optional[str] = None
    click_throughs: Optional[int] = None
    configuration_attributes: Optional[Dict[str, Any]] = None
    attributes: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    deactivated: Optional[bool] = None
    delivery_count: Optional[int] = None
    delivery_types: Optional[List[str]] = None
    foreign_creator_id: Optional[str] = None
    invitation_type: Optional[str] = None
    modified_at: Optional[str] = None
    status: Optional[str] = None
    target: Optional[Union[InvitationTargetRecord, List[InvitationTargetRecord]]] = None
    views: Optional[int] = None
    widget_configuration_id: Optional[str] = None
    project_id: Optional[str] = None
    groups: Optional[List[InvitationGroup]] = None  # Full group information
    accepts: Optional[List[InvitationAcceptance]] = None


class AcceptInvitationsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    invitation_ids: List[str] = Field(alias="invitationIds")
    target: InvitationTarget


class VortexError(Exception):
    """Base class for every error raised by the Vortex client."""


class InvalidApiKeyError(VortexError, ValueError):
    """Raised when the API key is not of the form VRTX.{encodedId}.{key}."""


class VortexTransportError(VortexError):
    """Raised when the HTTP request could not be completed."""


class VortexApiError(VortexError):
    def __init__(self, message: str, status_code: int, body: str = ""):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)
