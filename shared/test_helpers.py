"""
Test helper functions and factory methods for scs-client.
"""

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import jwt

MOCK_SIGNING_SECRET = "mock-secret-" + "0" * 52

# Known keys in each encoding.
TEST_GLOBAL_API_KEY = (
    "eyJhbGciOiJIUzUxMiIsInR5cCI6IkpXVCJ9.eyJ0IjoiZyJ9."
    "LloWc3qLRkBm_djlOjXE8wNSENqOay17xHLJR5XIr0cwkyhhh8w_oBaiQDktBkOvh-wKLQGUKavSQuOwXEb2_g"
)
LEGACY_API_KEY_VALID = (
    "eyJhbGciOiJIUzUxMiJ9."
    "eyJzdWIiOiJzcXVpcnJlbCIsImNwIjoiY29udHJvbC5leGFtcGxlLmNvbSIsImMiOiJjYWNoZS5leGFtcGxlLmNvbSJ9."
    "YY7RSMBCpMRs_qgbNkW0PYC2eX-MukLixLWJyvBpnMVaOba-OV0G5jgNmNbtn4zaLT8tlEncV6wQ_CkTI_PvoA"
)
LEGACY_API_KEY_MISSING_CONTROL = (
    "eyJhbGciOiJIUzUxMiJ9."
    "eyJzdWIiOiJzcXVpcnJlbCIsImMiOiJjYWNoZS5leGFtcGxlLmNvbSJ9."
    "RzLpBXut4s0fEXHtVIYVNb6Z8tiHSP9iu2j6OJpJHDksNXuOgTVFlMyG4V3gvMLMUwQmgtov-U9pMbaghQnr-Q"
)
V1_API_KEY_MISSING_KEY = "eyJlbmRwb2ludCI6ICJhLmIuY29tIn0="


@dataclass
class RecordedCall:
    """One call made through a RecordingTransport."""
    method: str
    request: Any
    metadata: Dict[str, str]
    timeout: Optional[float]


class TokenFactory:
    """Builds API keys in each encoding the SDK accepts."""

    def __init__(self, secret: str = MOCK_SIGNING_SECRET):
        self.secret = secret

    def legacy_token(
        self,
        control_endpoint: Optional[str] = "control.example.com",
        cache_endpoint: Optional[str] = "cache.example.com",
        subject: str = "squirrel",
    ) -> str:
        """Signed legacy key; pass None to leave an endpoint claim out."""
        payload: Dict[str, Any] = {"sub": subject}
        if control_endpoint is not None:
            payload["cp"] = control_endpoint
        if cache_endpoint is not None:
            payload["c"] = cache_endpoint
        return jwt.encode(payload, self.secret, algorithm="HS512")

    def v2_token(self, **claims: Any) -> str:
        payload = {"t": "g", **claims}
        return jwt.encode(payload, self.secret, algorithm="HS512")

    @staticmethod
    def v1_token(
        endpoint: Optional[str] = "test.momentohq.com",
        api_key: Optional[str] = "inner-api-key",
        urlsafe: bool = False,
    ) -> str:
        body: Dict[str, Any] = {}
        if endpoint is not None:
            body["endpoint"] = endpoint
        if api_key is not None:
            body["api_key"] = api_key
        raw = json.dumps(body).encode("utf-8")
        encoded = base64.urlsafe_b64encode(raw) if urlsafe else base64.b64encode(raw)
        return encoded.decode("ascii")


class RecordingTransport:
    """Transport double that records calls and replays canned responses.

    ``responses`` maps a method name to a response message, or to an
    exception to raise. Methods without an entry return an empty message.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Any]] = None,
        endpoint: str = "",
        service: str = "",
        headers: Optional[Dict[str, str]] = None,
    ):
        self.responses = dict(responses or {})
        self.endpoint = endpoint
        self.service = service
        self.headers = dict(headers or {})
        self.calls: List[RecordedCall] = []
        self.closed = False

    async def unary(self, method, request, response_type, metadata=None, timeout=None):
        self.calls.append(RecordedCall(method, request, dict(metadata or {}), timeout))
        response = self.responses.get(method)
        if isinstance(response, BaseException):
            raise response
        if response is None:
            return response_type.model_validate({})
        return response

    async def close(self) -> None:
        self.closed = True

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> Optional[RecordedCall]:
        return self.calls[-1] if self.calls else None


@dataclass
class RecordingTransportFactory:
    """Transport factory handing out one RecordingTransport per service."""
    responses: Dict[str, Any] = field(default_factory=dict)
    transports: Dict[str, RecordingTransport] = field(default_factory=dict)

    def __call__(self, endpoint: str, service: str, headers: Dict[str, str]) -> RecordingTransport:
        transport = RecordingTransport(self.responses, endpoint, service, headers)
        self.transports[service] = transport
        return transport

    def for_service(self, service: str) -> RecordingTransport:
        return self.transports[service]

    @property
    def total_calls(self) -> int:
        return sum(t.call_count for t in self.transports.values())
