"""
Payment collaborators.

The real providers live outside this service; the simulated ones accept every
request so the flow can be exercised end to end. Confirmation for the express
channel always arrives later through the callback endpoint.
"""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional, Protocol

from apps.common import get_logger

logger = get_logger(__name__).bind(component="checkout", layer="gateway")


class PaymentGatewayError(Exception):
    """The payment collaborator could not be reached or refused the request."""


class PaymentGateway(Protocol):
    def request_push(self, attempt_id: str, destination: str, amount: Decimal) -> Optional[str]:
        ...


class TransferVerifier(Protocol):
    def verify(self, proof_reference: str, amount: Decimal) -> bool:
        ...


class SimulatedPaymentGateway:
    def request_push(self, attempt_id: str, destination: str, amount: Decimal) -> str:
        reference = uuid.uuid4().hex
        logger.info(
            "Simulated payment push requested",
            attempt_id=attempt_id,
            destination=destination[-4:],
            amount=str(amount),
            reference=reference,
        )
        return reference


class SimulatedTransferVerifier:
    def verify(self, proof_reference: str, amount: Decimal) -> bool:
        logger.info("Simulated transfer verification", amount=str(amount))
        return bool(proof_reference)
