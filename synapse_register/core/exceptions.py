#!/usr/bin/env python3
"""
Exceptions raised by the registration client.

Every error is terminal for a registration run. The CLI maps them to a
non-zero exit status; library callers can catch RegistrationError.
"""
from typing import Optional


class RegistrationError(Exception):
    """Base class for all registration failures"""
    category = "registration"

    @property
    def diagnostic(self) -> str:
        """Text shown to the operator for this failure"""
        return str(self)


class ConfigError(RegistrationError):
    """Raised when required configuration is missing or invalid"""
    category = "config"

    def __init__(self, message: str, missing: Optional[list] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class TransportError(RegistrationError):
    """Raised when the homeserver cannot be reached (DNS, connection, timeout)"""
    category = "transport"


class ProtocolError(RegistrationError):
    """Raised when the homeserver answers with a non-200 status

    The raw response body is kept verbatim; Synapse puts the errcode and
    error message there.
    """
    category = "protocol"

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    @property
    def diagnostic(self) -> str:
        return self.response_body


class DecodeError(RegistrationError):
    """Raised when a 200 response body is not the JSON we expect"""
    category = "decode"

    def __init__(self, message: str, response_body: str = ""):
        super().__init__(message)
        self.response_body = response_body
