from enum import Enum
from typing import Dict, Tuple


class CheckoutState(str, Enum):
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    AWAITING_CONFIRMATION = "AWAITING_CONFIRMATION"
    SUCCESS = "SUCCESS"
    TIMED_OUT = "TIMED_OUT"
    FAILED = "FAILED"


class CheckoutEvent(str, Enum):
    SUBMIT = "submit"
    CONFIRMATION_STARTED = "confirmation_started"
    TICK = "tick"
    EXPIRE = "expire"
    CONFIRM = "confirm"
    VERIFIED = "verified"
    CANCEL = "cancel"
    ABORT = "abort"
    RETRY = "retry"


# confirm/verified land on FAILED instead of SUCCESS when the order cannot be written.
TRANSITIONS: Dict[Tuple[CheckoutState, CheckoutEvent], CheckoutState] = {
    (CheckoutState.IDLE, CheckoutEvent.SUBMIT): CheckoutState.PROCESSING,
    (CheckoutState.IDLE, CheckoutEvent.CANCEL): CheckoutState.IDLE,
    (CheckoutState.PROCESSING, CheckoutEvent.CONFIRMATION_STARTED): CheckoutState.AWAITING_CONFIRMATION,
    (CheckoutState.PROCESSING, CheckoutEvent.VERIFIED): CheckoutState.SUCCESS,
    (CheckoutState.PROCESSING, CheckoutEvent.CANCEL): CheckoutState.IDLE,
    (CheckoutState.PROCESSING, CheckoutEvent.ABORT): CheckoutState.IDLE,
    (CheckoutState.AWAITING_CONFIRMATION, CheckoutEvent.TICK): CheckoutState.AWAITING_CONFIRMATION,
    (CheckoutState.AWAITING_CONFIRMATION, CheckoutEvent.EXPIRE): CheckoutState.TIMED_OUT,
    (CheckoutState.AWAITING_CONFIRMATION, CheckoutEvent.CONFIRM): CheckoutState.SUCCESS,
    (CheckoutState.AWAITING_CONFIRMATION, CheckoutEvent.CANCEL): CheckoutState.IDLE,
    (CheckoutState.TIMED_OUT, CheckoutEvent.RETRY): CheckoutState.IDLE,
    (CheckoutState.FAILED, CheckoutEvent.RETRY): CheckoutState.IDLE,
}

TERMINAL_STATES = frozenset({CheckoutState.SUCCESS, CheckoutState.TIMED_OUT, CheckoutState.FAILED})
