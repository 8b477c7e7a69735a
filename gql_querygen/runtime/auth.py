"""Header-based authentication for ``HttpExecutor``.

Example:
    executor = HttpExecutor(url, auth=BearerAuth(token))

    class OrgAuth:
        def get_headers(self) -> dict[str, str]:
            return {"Authorization": f"Bearer {token}", "X-Org-ID": org_id}
"""

from typing import Dict, Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Anything that can produce request headers."""

    def get_headers(self) -> Dict[str, str]:
        ...


class BearerAuth:
    """``Authorization: Bearer <token>``."""

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class HeaderAuth:
    """A fixed set of headers, e.g. an API key header."""

    def __init__(self, headers: Dict[str, str]):
        self.headers = dict(headers)

    def get_headers(self) -> Dict[str, str]:
        return dict(self.headers)
