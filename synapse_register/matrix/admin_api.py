#!/usr/bin/env python3
"""
Synapse admin registration API - nonce fetch, registration submit and
response decoding for /_synapse/admin/v1/register
"""
import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp

from synapse_register.core.exceptions import DecodeError, ProtocolError, TransportError
from synapse_register.core.types import RegistrationRequest, RegistrationResponse

logger = logging.getLogger("synapse_register.admin_api")

REGISTER_PATH = "/_synapse/admin/v1/register"

RESPONSE_FIELDS = ("access_token", "user_id", "home_server", "device_id")


def register_url(base_url: str) -> str:
    """Build the shared-secret register endpoint for a homeserver base URL"""
    return f"{base_url.rstrip('/')}{REGISTER_PATH}"


def _client_timeout(timeout: Optional[float]) -> aiohttp.ClientTimeout:
    # total=None disables the timeout
    return aiohttp.ClientTimeout(total=timeout)


def _describe(error: BaseException) -> str:
    text = str(error)
    return f"{type(error).__name__}: {text}" if text else type(error).__name__


async def _send(
    method: str,
    url: str,
    timeout: Optional[float],
    payload: Optional[Dict[str, Any]] = None,
) -> Tuple[int, bytes]:
    """Issue one request and return (status, raw body bytes)

    Raises:
        TransportError: On connection, DNS or timeout failures
    """
    try:
        async with aiohttp.ClientSession() as session:
            if method == "GET":
                request = session.get(url, timeout=_client_timeout(timeout))
            else:
                request = session.post(url, json=payload, timeout=_client_timeout(timeout))
            async with request as response:
                raw = await response.read()
                return response.status, raw
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransportError(f"{method} {url} failed: {_describe(e)}") from e


def _error_text(raw: bytes) -> str:
    # Invalid UTF-8 becomes U+FFFD
    return raw.decode("utf8", errors="replace")


def _success_text(raw: bytes, what: str) -> str:
    try:
        return raw.decode("utf8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"{what} is not valid UTF-8: {e}", response_body=_error_text(raw)) from e


def _load_json_object(body: str, what: str) -> Dict[str, Any]:
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"{what} is not valid JSON: {e}", response_body=body) from e
    if not isinstance(data, dict):
        raise DecodeError(f"{what} is not a JSON object", response_body=body)
    return data


async def fetch_nonce(base_url: str, timeout: Optional[float] = None) -> str:
    """Fetch a registration nonce from the homeserver

    Args:
        base_url: Homeserver base URL, e.g. https://matrix.example.org
        timeout: Total seconds allowed for the request, None for no limit

    Returns:
        The nonce string issued by the server

    Raises:
        TransportError: The homeserver could not be reached
        ProtocolError: Non-200 status; carries the raw response body
        DecodeError: 200 response without a usable ``nonce`` field
    """
    url = register_url(base_url)
    logger.info(f"Requesting registration nonce from {url}")

    status, raw = await _send("GET", url, timeout)
    if status != 200:
        body = _error_text(raw)
        logger.debug(f"Nonce request failed: {status} - {body}")
        raise ProtocolError(f"Nonce request returned HTTP {status}", status_code=status, response_body=body)

    body = _success_text(raw, "Nonce response")
    data = _load_json_object(body, "Nonce response")
    nonce = data.get("nonce")
    if not isinstance(nonce, str):
        raise DecodeError("Nonce response has no 'nonce' string field", response_body=body)

    logger.debug(f"Received nonce: {nonce}")
    return nonce


async def submit_registration(
    base_url: str,
    request: RegistrationRequest,
    timeout: Optional[float] = None,
) -> str:
    """POST a signed registration request

    Args:
        base_url: Homeserver base URL
        request: Registration request with ``mac`` already set
        timeout: Total seconds allowed for the request, None for no limit

    Returns:
        Raw response body of the successful registration

    Raises:
        TransportError: The homeserver could not be reached
        ProtocolError: Non-200 status; carries the raw response body
        DecodeError: 200 response body is not valid UTF-8
    """
    url = register_url(base_url)
    logger.info(f"Registering user {request.username} (admin={request.admin}) at {url}")

    status, raw = await _send("POST", url, timeout, payload=request.to_dict())
    if status != 200:
        body = _error_text(raw)
        logger.debug(f"Registration of {request.username} failed: {status} - {body}")
        raise ProtocolError(f"Registration returned HTTP {status}", status_code=status, response_body=body)

    return _success_text(raw, "Registration response")


def decode_registration_response(body: str) -> RegistrationResponse:
    """Parse the body of a successful registration

    Only checks that every field is present; values are passed through untouched.

    Raises:
        DecodeError: Body is not a JSON object or a field is missing
    """
    data = _load_json_object(body, "Registration response")
    missing = [name for name in RESPONSE_FIELDS if name not in data]
    if missing:
        raise DecodeError(
            f"Registration response is missing fields: {', '.join(missing)}",
            response_body=body,
        )
    return RegistrationResponse(**{name: data[name] for name in RESPONSE_FIELDS})
