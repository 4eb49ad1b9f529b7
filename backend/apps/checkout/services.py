from __future__ import annotations

import uuid
from typing import Any, Optional

from apps.carts.protocols import CartStoreFactory
from apps.common import get_logger
from apps.common.i18n import PAYMENT_REQUEST_FAILED, TRANSFER_NOT_VERIFIED
from apps.orders.commands import OrderLineCommand, PlaceOrderCommand
from apps.orders.models import PaymentChannel
from apps.orders.services import OrderService
from .dtos import CheckoutAttempt, CheckoutStatusDTO
from .errors import CheckoutValidationError, PaymentCollaboratorError, UnknownAttemptError
from .gateways import PaymentGateway, PaymentGatewayError, TransferVerifier
from .machine import CheckoutMachine
from .registry import AttemptRegistry
from .scheduler import Scheduler
from .states import CheckoutState

logger = get_logger(__name__).bind(component="checkout", layer="service")


class CheckoutService:
    def __init__(
        self,
        *,
        registry: AttemptRegistry,
        cart_factory: CartStoreFactory,
        orders: OrderService,
        gateway: PaymentGateway,
        verifier: TransferVerifier,
        scheduler: Scheduler,
        countdown_seconds: int = 120,
        tick_interval: float = 1.0,
        phone_digits: int = 9,
        country_code: str = "244",
    ):
        self.registry = registry
        self.cart_factory = cart_factory
        self.orders = orders
        self.gateway = gateway
        self.verifier = verifier
        self.scheduler = scheduler
        self.countdown_seconds = countdown_seconds
        self.tick_interval = tick_interval
        self.phone_digits = phone_digits
        self.country_code = country_code
        self.logger = logger.bind(service="CheckoutService")

    def _new_machine(self, user_id: int) -> CheckoutMachine:
        attempt = CheckoutAttempt(
            attempt_id=uuid.uuid4().hex,
            user_id=user_id,
            countdown_seconds=self.countdown_seconds,
        )
        machine = CheckoutMachine(
            attempt,
            scheduler=self.scheduler,
            settle=self._settle,
            tick_interval=self.tick_interval,
            phone_digits=self.phone_digits,
            country_code=self.country_code,
        )
        self.registry.put(user_id, machine)
        self.logger.debug("Checkout attempt created", user_id=user_id, attempt_id=attempt.attempt_id)
        return machine

    def _current(self, user_id: int) -> CheckoutMachine:
        return self.registry.get(user_id) or self._new_machine(user_id)

    def _fresh(self, user_id: int) -> CheckoutMachine:
        """Current attempt, or a new one once the previous attempt succeeded."""
        machine = self.registry.get(user_id)
        if machine is None or machine.state == CheckoutState.SUCCESS:
            return self._new_machine(user_id)
        return machine

    def _settle(self, attempt: CheckoutAttempt) -> Any:
        """Write the order, then remove the paid quantities; an error leaves the cart as is."""
        totals = attempt.totals
        order = self.orders.place_order(
            PlaceOrderCommand(
                user_id=attempt.user_id,
                attempt_id=attempt.attempt_id,
                channel=attempt.channel,
                lines=[
                    OrderLineCommand(
                        product_id=int(line.product_id),
                        name=line.name,
                        unit_price=line.unit_price,
                        quantity=line.quantity,
                        options=dict(line.options),
                    )
                    for line in attempt.lines
                ],
                subtotal=totals.subtotal,
                shipping=totals.shipping,
                total=totals.total,
                destination=attempt.destination or "",
                proof_reference=attempt.proof_reference,
            )
        )
        self.cart_factory(attempt.user_id).deduct(attempt.lines)
        return order.id

    def status(self, user_id: int) -> CheckoutStatusDTO:
        return self._current(user_id).snapshot()

    def attach_proof(self, user_id: int, reference: str) -> CheckoutStatusDTO:
        machine = self._fresh(user_id)
        machine.attach_proof(reference)
        return machine.snapshot()

    def submit(
        self, user_id: int, channel: str, destination: Optional[str] = None
    ) -> CheckoutStatusDTO:
        machine = self._fresh(user_id)
        cart = self.cart_factory(user_id)
        machine.submit(channel, destination, lines=cart.lines(), totals=cart.totals())
        attempt = machine.attempt
        self.logger.info(
            "Checkout submitted",
            user_id=user_id,
            attempt_id=attempt.attempt_id,
            channel=attempt.channel,
            amount=str(attempt.amount),
        )
        if channel == PaymentChannel.EXPRESS:
            self._request_push(machine)
        else:
            self._verify_transfer(machine)
        return machine.snapshot()

    def _request_push(self, machine: CheckoutMachine) -> None:
        attempt = machine.attempt
        try:
            self.gateway.request_push(attempt.attempt_id, attempt.destination, attempt.amount)
        except PaymentGatewayError as exc:
            self.logger.warning(
                "Payment push failed", attempt_id=attempt.attempt_id, error=str(exc)
            )
            machine.abort(PAYMENT_REQUEST_FAILED)
            raise PaymentCollaboratorError(details={"attemptId": attempt.attempt_id})
        machine.confirmation_started()

    def _verify_transfer(self, machine: CheckoutMachine) -> None:
        attempt = machine.attempt
        try:
            verified = self.verifier.verify(attempt.proof_reference, attempt.amount)
        except PaymentGatewayError as exc:
            self.logger.warning(
                "Transfer verification unavailable", attempt_id=attempt.attempt_id, error=str(exc)
            )
            machine.abort(PAYMENT_REQUEST_FAILED)
            raise PaymentCollaboratorError(details={"attemptId": attempt.attempt_id})
        if not verified:
            self.logger.info("Transfer proof rejected", attempt_id=attempt.attempt_id)
            machine.abort(TRANSFER_NOT_VERIFIED, drop_proof=True)
            raise CheckoutValidationError(message=TRANSFER_NOT_VERIFIED)
        machine.verified()

    def confirm(self, attempt_id: str) -> CheckoutStatusDTO:
        machine = self.registry.find_attempt(attempt_id)
        if machine is None:
            self.logger.warning("Confirmation for unknown attempt", attempt_id=attempt_id)
            raise UnknownAttemptError(details={"attemptId": attempt_id})
        machine.confirm()
        return machine.snapshot()

    def cancel(self, user_id: int) -> CheckoutStatusDTO:
        machine = self._current(user_id)
        machine.cancel()
        return machine.snapshot()

    def retry(self, user_id: int) -> CheckoutStatusDTO:
        machine = self._current(user_id)
        machine.retry()
        return machine.snapshot()
