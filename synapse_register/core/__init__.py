"""
Core module for shared-secret registration

Contains:
- generate_mac: Computes the registration MAC
- RegistrationOrchestrator: Sequences nonce fetch, signing, submit and decode
- Shared dataclasses and exceptions
"""

from .exceptions import ConfigError, DecodeError, ProtocolError, RegistrationError, TransportError
from .signer import generate_mac
from .types import RegistrationConfig, RegistrationRequest, RegistrationResponse, RegistrationState

__all__ = [
    "ConfigError",
    "DecodeError",
    "ProtocolError",
    "RegistrationError",
    "TransportError",
    "generate_mac",
    "RegistrationConfig",
    "RegistrationRequest",
    "RegistrationResponse",
    "RegistrationState",
]
