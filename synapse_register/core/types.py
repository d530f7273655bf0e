#!/usr/bin/env python3
"""
Shared type definitions for the core module.

This module contains dataclasses and types used across the signer, the admin
API helpers and the orchestrator to avoid circular import issues.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

DEFAULT_TIMEOUT_SECONDS = 30.0


class RegistrationState(str, Enum):
    """States of a single registration run, in the order they are visited"""
    IDLE = "idle"
    NONCE_REQUESTED = "nonce_requested"
    NONCE_RECEIVED = "nonce_received"
    REQUEST_SIGNED = "request_signed"
    SUBMITTED = "submitted"
    DECODED = "decoded"
    FAILED = "failed"


@dataclass(frozen=True)
class RegistrationConfig:
    """Immutable configuration for one registration run.

    Built once at startup (see synapse_register.config) and passed to the
    orchestrator. ``timeout`` is the total seconds allowed per HTTP request;
    None waits indefinitely.
    """
    homeserver_url: str
    shared_secret: str = field(repr=False)
    username: str
    password: str = field(repr=False)
    display_name: str
    admin: bool = False
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        return self.homeserver_url.rstrip("/")


@dataclass
class RegistrationRequest:
    """Body of the POST to the shared-secret register endpoint.

    ``displayname`` is sent to the server but is not covered by ``mac``.
    """
    nonce: str
    username: str
    displayname: str
    password: str = field(repr=False)
    admin: bool = False
    mac: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nonce": self.nonce,
            "username": self.username,
            "displayname": self.displayname,
            "password": self.password,
            "admin": self.admin,
            "mac": self.mac,
        }


@dataclass(frozen=True)
class RegistrationResponse:
    """Credentials returned by the homeserver for the new account"""
    access_token: str = field(repr=False)
    user_id: str
    home_server: str
    device_id: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "access_token": self.access_token,
            "user_id": self.user_id,
            "home_server": self.home_server,
            "device_id": self.device_id,
        }
