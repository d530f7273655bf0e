"""
Shared-secret admin registration client for Synapse homeservers.
"""
from synapse_register.core.exceptions import (
    ConfigError,
    DecodeError,
    ProtocolError,
    RegistrationError,
    TransportError,
)
from synapse_register.core.orchestrator import RegistrationOrchestrator
from synapse_register.core.signer import generate_mac
from synapse_register.core.types import (
    RegistrationConfig,
    RegistrationRequest,
    RegistrationResponse,
    RegistrationState,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DecodeError",
    "ProtocolError",
    "RegistrationConfig",
    "RegistrationError",
    "RegistrationOrchestrator",
    "RegistrationRequest",
    "RegistrationResponse",
    "RegistrationState",
    "TransportError",
    "generate_mac",
]
