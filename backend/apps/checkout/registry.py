from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from .machine import CheckoutMachine


class AttemptRegistry:
    """In-process map of the single live checkout attempt per user."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_user: Dict[int, "CheckoutMachine"] = {}

    def get(self, user_id: int) -> Optional["CheckoutMachine"]:
        with self._lock:
            return self._by_user.get(user_id)

    def put(self, user_id: int, machine: "CheckoutMachine") -> None:
        with self._lock:
            previous = self._by_user.get(user_id)
            self._by_user[user_id] = machine
        if previous is not None and previous is not machine:
            previous.discard()

    def find_attempt(self, attempt_id: str) -> Optional["CheckoutMachine"]:
        with self._lock:
            for machine in self._by_user.values():
                if machine.attempt.attempt_id == attempt_id:
                    return machine
        return None

    def clear(self) -> None:
        with self._lock:
            machines = list(self._by_user.values())
            self._by_user.clear()
        for machine in machines:
            machine.discard()
