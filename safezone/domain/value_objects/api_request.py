"""Request value objects used by the request pipeline.

`ApiRequest` is everything needed to issue (and later replay) one call.
`PendingRequest` is an `ApiRequest` suspended while a credential refresh is
in flight, paired with the future through which it is settled exactly once.
"""

import asyncio
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

AUTHORIZATION_HEADER = "Authorization"


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ApiRequest:
    """One call against the SafeZone API.

    Attributes:
        endpoint: Path below the ``/api`` prefix, e.g. ``/users/me``.
        method: HTTP method.
        headers: Extra headers. An ``Authorization`` header set here is sent
            as-is and disables bearer attachment.
        body: JSON-serialisable body, or None.
        params: Query parameters; None values are dropped.
        authenticated: False for public endpoints (login, register, email
            verification, refresh) which never carry the stored credential.
    """

    endpoint: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    params: Mapping[str, Any] = field(default_factory=dict)
    authenticated: bool = True

    def __post_init__(self):
        if not self.endpoint.startswith("/"):
            raise ValueError("Endpoint must start with '/'")
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", _freeze(self.headers))
        object.__setattr__(
            self, "params", _freeze({k: v for k, v in (self.params or {}).items() if v is not None})
        )

    @property
    def has_explicit_authorization(self) -> bool:
        return any(name.lower() == AUTHORIZATION_HEADER.lower() for name in self.headers)

    @property
    def uses_stored_credential(self) -> bool:
        """True when the stored access credential is attached to this call."""
        return self.authenticated and not self.has_explicit_authorization

    def without_authorization(self) -> "ApiRequest":
        """Copy of this request with any Authorization header removed."""
        headers = {k: v for k, v in self.headers.items() if k.lower() != AUTHORIZATION_HEADER.lower()}
        return replace(self, headers=headers)

    def describe(self) -> str:
        return f"{self.method} {self.endpoint}"


@dataclass
class PendingRequest:
    """A caller waiting for the in-flight refresh to settle.

    The future resolves with the new access token or fails with the error
    that ended the refresh. It is settled at most once; a future already
    cancelled by its caller is skipped, but still removed from the queue.
    """

    request: ApiRequest
    future: "asyncio.Future[str]"

    @classmethod
    def create(cls, request: ApiRequest) -> "PendingRequest":
        loop = asyncio.get_running_loop()
        return cls(request=request.without_authorization(), future=loop.create_future())

    @property
    def settled(self) -> bool:
        return self.future.done()

    def resolve(self, access_token: str) -> bool:
        if self.future.done():
            return False
        self.future.set_result(access_token)
        return True

    def reject(self, error: BaseException) -> bool:
        if self.future.done():
            return False
        self.future.set_exception(error)
        return True
