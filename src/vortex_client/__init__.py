"""
Vortex Client

A Python client for Vortex invitation management and widget token generation.
"""

from .config import VortexSettings
from .signing import ApiKey, parse_api_key, sign_token
from .types import (
    AcceptInvitationsRequest,
    GroupInput,
    IdentifierInput,
    InvalidApiKeyError,
    Invitation,
    InvitationAcceptance,
    InvitationGroup,
    InvitationTarget,
    InvitationTargetRecord,
    VortexApiError,
    VortexError,
    VortexTransportError,
)
from .vortex import VortexClient

__version__ = "0.1.0"
__author__ = "TeamVortexSoftware"
__email__ = "support@vortexsoftware.com"

__all__ = [
    "VortexClient",
    "VortexSettings",
    "ApiKey",
    "parse_api_key",
    "sign_token",
    "IdentifierInput",
    "GroupInput",
    "InvitationTarget",
    "InvitationTargetRecord",
    "Invitation",
    "InvitationGroup",
    "InvitationAcceptance",
    "AcceptInvitationsRequest",
    "VortexError",
    "InvalidApiKeyError",
    "VortexTransportError",
    "VortexApiError",
]
