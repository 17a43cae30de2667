"""
Per-request credentials for the remote admin API.

The caller's bearer token is forwarded as-is; nothing is stored between
requests.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class ApiSession:
    """Base URL plus the bearer token used for one request."""

    base_url: str
    token: Optional[str] = None

    @property
    def headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header, else None."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
