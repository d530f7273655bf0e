from synapse_register.matrix.admin_api import (
    REGISTER_PATH,
    decode_registration_response,
    fetch_nonce,
    register_url,
    submit_registration,
)

__all__ = [
    "REGISTER_PATH",
    "decode_registration_response",
    "fetch_nonce",
    "register_url",
    "submit_registration",
]
