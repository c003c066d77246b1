import base64
from typing import Any, Mapping, Optional, Union

from .constants import HEADER_AUTHORIZATION

Auth = Union[str, Mapping[str, Any]]


def parse_basic_auth(auth: Auth) -> Optional[tuple[str, str]]:
    """Extract (user, password) from an auth option.

    Accepts ``{"user", "pass"}``, ``{"username", "password"}`` or a
    ``"user:pass"`` string. Anything else means no credentials.
    """
    if isinstance(auth, str):
        user, _, password = auth.partition(":")
        return user, password
    if isinstance(auth, Mapping):
        user = auth.get("user") or auth.get("username") or ""
        password = auth.get("pass") or auth.get("password") or ""
        return f"{user}", f"{password}"
    return None


def basic_auth_value(user: str, password: str) -> str:
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def apply_basic_auth(headers: dict[str, str], auth: Auth) -> None:
    # overwrites any Authorization header the caller set
    credentials = parse_basic_auth(auth)
    if credentials is not None:
        headers[HEADER_AUTHORIZATION] = basic_auth_value(*credentials)
