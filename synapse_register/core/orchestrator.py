#!/usr/bin/env python3
"""
Registration Orchestrator - runs one shared-secret registration

Walks a strictly linear state machine:
    IDLE -> NONCE_REQUESTED -> NONCE_RECEIVED -> REQUEST_SIGNED -> SUBMITTED -> DECODED
Any error moves straight to FAILED and ends the run. There are no retries; a
new attempt needs a new orchestrator and therefore a fresh nonce.
"""
import asyncio
import logging
from typing import List, Optional

from synapse_register.core.exceptions import RegistrationError, TransportError
from synapse_register.core.signer import generate_mac
from synapse_register.core.types import (
    RegistrationConfig,
    RegistrationRequest,
    RegistrationResponse,
    RegistrationState,
)
from synapse_register.matrix import admin_api

logger = logging.getLogger("synapse_register.orchestrator")


class RegistrationOrchestrator:
    """Sequences nonce fetch, signing, submit and decode for one user"""

    def __init__(self, config: RegistrationConfig):
        self.config = config
        self.state = RegistrationState.IDLE
        self.history: List[RegistrationState] = [RegistrationState.IDLE]
        self.nonce: Optional[str] = None
        self.request: Optional[RegistrationRequest] = None
        self.response: Optional[RegistrationResponse] = None
        self.error: Optional[Exception] = None

    def _transition(self, state: RegistrationState) -> None:
        logger.debug(f"Registration state {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _fail(self, error: Exception) -> None:
        self.error = error
        self._transition(RegistrationState.FAILED)
        # Reported once by the caller
        logger.debug(f"Registration of {self.config.username} failed: {error!r}")

    async def register(self) -> RegistrationResponse:
        """Run the registration once

        Returns:
            The decoded RegistrationResponse

        Raises:
            RegistrationError: The first error encountered; state is FAILED
            RuntimeError: The orchestrator has already been run
        """
        if self.state is not RegistrationState.IDLE:
            raise RuntimeError("A registration run cannot be restarted; create a new orchestrator")

        config = self.config
        try:
            self._transition(RegistrationState.NONCE_REQUESTED)
            self.nonce = await admin_api.fetch_nonce(config.base_url, timeout=config.timeout)
            self._transition(RegistrationState.NONCE_RECEIVED)

            self.request = RegistrationRequest(
                nonce=self.nonce,
                username=config.username,
                displayname=config.display_name,
                password=config.password,
                admin=config.admin,
            )
            self.request.mac = generate_mac(
                config.shared_secret,
                self.nonce,
                config.username,
                config.password,
                config.admin,
            )
            logger.debug(f"Computed registration MAC: {self.request.mac}")
            self._transition(RegistrationState.REQUEST_SIGNED)

            body = await admin_api.submit_registration(config.base_url, self.request, timeout=config.timeout)
            self._transition(RegistrationState.SUBMITTED)

            self.response = admin_api.decode_registration_response(body)
            self._transition(RegistrationState.DECODED)
        except RegistrationError as e:
            self._fail(e)
            raise
        except asyncio.CancelledError:
            self._fail(TransportError(f"Registration cancelled in state {self.state.value}"))
            raise
        except Exception as e:
            self._fail(e)
            raise

        logger.info(f"Registered {self.response.user_id} on {self.response.home_server}")
        return self.response
