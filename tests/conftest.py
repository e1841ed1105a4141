import base64
import uuid
from typing import Callable, List

import httpx
import pytest

from vortex_client import VortexClient

KEY_UUID = uuid.UUID("123e4567-e89b-12d3-a456-426614174000")
KEY_SECRET = "sk_test_3f9a1c"


def make_api_key(id_bytes: bytes = KEY_UUID.bytes, secret: str = KEY_SECRET) -> str:
    encoded_id = base64.urlsafe_b64encode(id_bytes).decode().rstrip("=")
    return f"VRTX.{encoded_id}.{secret}"


API_KEY = make_api_key()


@pytest.fixture
def api_key() -> str:
    return API_KEY


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(requests_seen: List[httpx.Request]) -> Callable[..., VortexClient]:
    """Build a VortexClient whose HTTP calls are answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> VortexClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        return VortexClient(API_KEY, http_client=http_client, **kwargs)

    return factory
