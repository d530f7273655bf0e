#!/usr/bin/env python3
"""
MAC generation for the Synapse shared-secret registration API.

The digest covers nonce, username, password and the admin literal, each
separated by a single NUL byte. The display name is sent in the request but is
never part of the digest.

See: https://element-hq.github.io/synapse/latest/admin_api/register_api.html
"""
import hashlib
import hmac
from typing import Union

ADMIN_LITERAL = b"admin"
NOT_ADMIN_LITERAL = b"notadmin"


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf8")


def generate_mac(
    secret: Union[str, bytes],
    nonce: str,
    username: str,
    password: str,
    admin: bool = False,
) -> str:
    """Compute the HMAC-SHA1 registration MAC

    Args:
        secret: Registration shared secret, used only as the HMAC key
        nonce: Nonce returned by GET /_synapse/admin/v1/register
        username: Localpart of the user to register
        password: Password of the user to register
        admin: Whether the user is registered as a server admin

    Returns:
        Lower-case hex digest
    """
    mac = hmac.new(key=_to_bytes(secret), digestmod=hashlib.sha1)

    mac.update(_to_bytes(nonce))
    mac.update(b"\x00")
    mac.update(_to_bytes(username))
    mac.update(b"\x00")
    mac.update(_to_bytes(password))
    mac.update(b"\x00")
    mac.update(ADMIN_LITERAL if admin else NOT_ADMIN_LITERAL)

    return mac.hexdigest()
