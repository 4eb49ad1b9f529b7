"""
Checkout state machine.

A ``CheckoutMachine`` drives one ``CheckoutAttempt`` through the transitions
in ``states.TRANSITIONS``. It owns at most one countdown timer: starting a
countdown cancels the previous handle, and every transition out of
AWAITING_CONFIRMATION cancels it too. Ticks carry the generation of the
countdown that scheduled them, so a tick from a cancelled handle that already
fired is ignored.

Before SUCCESS the ``settle`` hook writes the order. If it raises, the attempt
ends in FAILED and the caller's cart is left alone.
"""
from __future__ import annotations

import threading
from dataclasses import replace
from typing import Any, Callable, Iterable, Optional

from apps.carts.dtos import CartLine, CartTotals
from apps.common import get_logger
from apps.common.i18n import (
    EMPTY_CART,
    INVALID_CHANNEL,
    INVALID_PHONE,
    ORDER_PERSIST_FAILED,
    PAYMENT_EXPIRED,
    PROOF_REQUIRED,
)
from apps.orders.models import PaymentChannel
from .dtos import CheckoutAttempt, CheckoutStatusDTO
from .errors import CheckoutValidationError, InvalidTransitionError
from .scheduler import Scheduler, TimerHandle
from .states import TRANSITIONS, CheckoutEvent, CheckoutState
from .validators import normalize_phone

logger = get_logger(__name__).bind(component="checkout", layer="machine")

SettleHook = Callable[[CheckoutAttempt], Any]


class CheckoutMachine:
    def __init__(
        self,
        attempt: CheckoutAttempt,
        *,
        scheduler: Scheduler,
        settle: SettleHook,
        tick_interval: float = 1.0,
        phone_digits: int = 9,
        country_code: str = "244",
    ):
        self.attempt = attempt
        self.scheduler = scheduler
        self.settle = settle
        self.tick_interval = tick_interval
        self.phone_digits = phone_digits
        self.country_code = country_code
        self._lock = threading.RLock()
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self.logger = logger.bind(attempt_id=attempt.attempt_id, user_id=attempt.user_id)

    @property
    def state(self) -> CheckoutState:
        return self.attempt.state

    @property
    def has_active_timer(self) -> bool:
        return self._timer is not None

    # transition plumbing

    def _target(self, event: CheckoutEvent) -> CheckoutState:
        target = TRANSITIONS.get((self.attempt.state, event))
        if target is None:
            self.logger.warning(
                "Rejected checkout transition",
                state=self.attempt.state.value,
                event=event.value,
            )
            raise InvalidTransitionError(
                details={"state": self.attempt.state.value, "event": event.value}
            )
        return target

    def _move(self, event: CheckoutEvent, target: CheckoutState) -> None:
        previous = self.attempt.state
        self.attempt.state = target
        if previous != target:
            self.logger.info(
                "Checkout transition",
                previous=previous.value,
                event=event.value,
                state=target.value,
            )

    def _fire(self, event: CheckoutEvent) -> CheckoutState:
        target = self._target(event)
        self._move(event, target)
        return target

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._generation += 1

    # attempt setup

    def attach_proof(self, reference: str) -> None:
        with self._lock:
            if self.attempt.state != CheckoutState.IDLE:
                raise InvalidTransitionError(
                    details={"state": self.attempt.state.value, "event": "attach_proof"}
                )
            self.attempt.proof_reference = reference
            self.logger.info("Payment proof attached")

    def submit(
        self,
        channel: str,
        destination: Optional[str],
        *,
        lines: Iterable[CartLine],
        totals: CartTotals,
    ) -> None:
        """
        IDLE -> PROCESSING. Guards fail with ``CheckoutValidationError`` and
        leave the attempt in IDLE.
        """
        with self._lock:
            target = self._target(CheckoutEvent.SUBMIT)
            # Frozen copy: later cart edits do not change what is being paid.
            lines = [replace(line, options=dict(line.options)) for line in lines]
            if not lines:
                raise CheckoutValidationError(message=EMPTY_CART)
            normalized = None
            if channel == PaymentChannel.EXPRESS:
                normalized = normalize_phone(destination, self.phone_digits, self.country_code)
                if normalized is None:
                    raise CheckoutValidationError(
                        message=INVALID_PHONE, details={"destination": destination or ""}
                    )
            elif channel == PaymentChannel.TRANSFER:
                if not self.attempt.proof_reference:
                    raise CheckoutValidationError(message=PROOF_REQUIRED)
            else:
                raise CheckoutValidationError(
                    message=INVALID_CHANNEL, details={"channel": channel}
                )
            self.attempt.channel = str(channel)
            self.attempt.destination = normalized
            self.attempt.lines = lines
            self.attempt.totals = totals
            self.attempt.error = None
            self._move(CheckoutEvent.SUBMIT, target)

    def abort(self, message: Optional[str] = None, *, drop_proof: bool = False) -> None:
        """PROCESSING -> IDLE when a collaborator refused the request."""
        with self._lock:
            self._fire(CheckoutEvent.ABORT)
            self.attempt.error = str(message) if message else None
            if drop_proof:
                self.attempt.proof_reference = None

    # express channel

    def confirmation_started(self) -> None:
        with self._lock:
            self._fire(CheckoutEvent.CONFIRMATION_STARTED)
            self.start_countdown()

    def start_countdown(self) -> None:
        """(Re)start the countdown; any running timer is cancelled first."""
        with self._lock:
            if self.attempt.state != CheckoutState.AWAITING_CONFIRMATION:
                raise InvalidTransitionError(
                    details={"state": self.attempt.state.value, "event": "start_countdown"}
                )
            self._cancel_timer()
            self.attempt.remaining_seconds = self.attempt.countdown_seconds
            self._schedule_tick(self._generation)
            self.logger.debug("Countdown started", seconds=self.attempt.remaining_seconds)

    def _schedule_tick(self, generation: int) -> None:
        self._timer = self.scheduler.call_later(
            self.tick_interval, lambda: self._on_tick(generation)
        )

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            if self.attempt.state != CheckoutState.AWAITING_CONFIRMATION:
                return
            self._timer = None
            self.attempt.remaining_seconds = max(self.attempt.remaining_seconds - 1, 0)
            if self.attempt.remaining_seconds > 0:
                self._fire(CheckoutEvent.TICK)
                self._schedule_tick(generation)
                return
            self.expire()

    def expire(self) -> None:
        with self._lock:
            self._fire(CheckoutEvent.EXPIRE)
            self._cancel_timer()
            self.attempt.remaining_seconds = 0
            self.attempt.error = str(PAYMENT_EXPIRED)

    def confirm(self) -> None:
        """Confirmation signal from the payment collaborator."""
        with self._lock:
            target = self._target(CheckoutEvent.CONFIRM)
            self._cancel_timer()
            self._finish(CheckoutEvent.CONFIRM, target)

    # transfer channel

    def verified(self) -> None:
        with self._lock:
            target = self._target(CheckoutEvent.VERIFIED)
            self._finish(CheckoutEvent.VERIFIED, target)

    def _finish(self, event: CheckoutEvent, target: CheckoutState) -> None:
        try:
            order_id = self.settle(self.attempt)
        except Exception:
            self.logger.exception("Order settlement failed", event=event.value)
            self.attempt.error = str(ORDER_PERSIST_FAILED)
            self._move(event, CheckoutState.FAILED)
            return
        self.attempt.order_id = order_id
        self.attempt.error = None
        self._move(event, target)

    # leaving the attempt

    def cancel(self) -> None:
        """Back to IDLE from any non-terminal state; the cart is not touched."""
        with self._lock:
            self._fire(CheckoutEvent.CANCEL)
            self._cancel_timer()
            self.attempt.remaining_seconds = 0
            self.attempt.error = None

    def retry(self) -> None:
        with self._lock:
            self._fire(CheckoutEvent.RETRY)
            self._cancel_timer()
            self.attempt.remaining_seconds = 0
            self.attempt.order_id = None
            self.attempt.error = None

    def discard(self) -> None:
        """Stop the timer of an attempt that is being replaced."""
        with self._lock:
            self._cancel_timer()

    def snapshot(self) -> CheckoutStatusDTO:
        with self._lock:
            attempt = self.attempt
            return CheckoutStatusDTO(
                attempt_id=attempt.attempt_id,
                state=attempt.state.value,
                channel=attempt.channel,
                destination=attempt.destination,
                has_proof=bool(attempt.proof_reference),
                countdown_seconds=attempt.countdown_seconds,
                remaining_seconds=attempt.remaining_seconds,
                amount=attempt.amount,
                order_id=attempt.order_id,
                error=attempt.error,
            )
