import unittest
from decimal import Decimal
from types import SimpleNamespace

from django.db import DatabaseError

from apps.carts.store import CartStore
from apps.checkout.errors import (
    CheckoutValidationError,
    InvalidTransitionError,
    PaymentCollaboratorError,
    UnknownAttemptError,
)
from apps.checkout.gateways import PaymentGatewayError
from apps.checkout.registry import AttemptRegistry
from apps.checkout.services import CheckoutService
from apps.checkout.tests.fakes import ManualScheduler
from apps.common.state import StateStore
from apps.common.tests.test_state import InMemoryStateRepository


class FakeOrderService:
    def __init__(self):
        self.commands = []
        self.error = None

    def place_order(self, command):
        if self.error:
            raise self.error
        self.commands.append(command)
        return SimpleNamespace(id=len(self.commands) + 100)


class FakeGateway:
    def __init__(self):
        self.requests = []
        self.error = None

    def request_push(self, attempt_id, destination, amount):
        if self.error:
            raise self.error
        self.requests.append((attempt_id, destination, amount))
        return "ref-1"


class FakeVerifier:
    def __init__(self, result=True):
        self.result = result
        self.calls = []

    def verify(self, proof_reference, amount):
        self.calls.append((proof_reference, amount))
        return self.result


def product(pid, price):
    return SimpleNamespace(id=pid, name=f"Produto {pid}", price=Decimal(price), image="")


class CheckoutServiceTests(unittest.TestCase):
    user_id = 7

    def setUp(self):
        self.state_repo = InMemoryStateRepository()
        self.orders = FakeOrderService()
        self.gateway = FakeGateway()
        self.verifier = FakeVerifier()
        self.scheduler = ManualScheduler()
        self.registry = AttemptRegistry()
        self.service = CheckoutService(
            registry=self.registry,
            cart_factory=self.cart,
            orders=self.orders,
            gateway=self.gateway,
            verifier=self.verifier,
            scheduler=self.scheduler,
            countdown_seconds=3,
        )
        self.cart().add_item(product(1, "50000"), 1, {"Potência": "5KVA"})

    def cart(self, user_id=None):
        return CartStore(StateStore(user_id or self.user_id, self.state_repo))

    def cart_ids(self):
        return [line.product_id for line in self.cart().lines()]

    def test_express_flow_settles_on_confirmation(self):
        status = self.service.submit(self.user_id, "EXPRESS", "+244 923 456 789")
        self.assertEqual(status.state, "AWAITING_CONFIRMATION")
        self.assertEqual(status.remaining_seconds, 3)
        self.assertEqual(self.gateway.requests, [(status.attempt_id, "923456789", Decimal("52500"))])

        confirmed = self.service.confirm(status.attempt_id)
        self.assertEqual(confirmed.state, "SUCCESS")
        self.assertEqual(confirmed.order_id, 101)
        command = self.orders.commands[0]
        self.assertEqual(command.attempt_id, status.attempt_id)
        self.assertEqual(command.total, Decimal("52500"))
        self.assertEqual(command.lines[0].product_id, 1)
        self.assertEqual(command.lines[0].options, {"Potência": "5KVA"})
        self.assertEqual(self.cart_ids(), [])

    def test_items_added_while_waiting_stay_in_cart(self):
        status = self.service.submit(self.user_id, "EXPRESS", "923456789")
        self.cart().add_item(product(2, "12500"))
        self.cart().add_item(product(1, "50000"))

        confirmed = self.service.confirm(status.attempt_id)
        self.assertEqual(confirmed.state, "SUCCESS")
        command = self.orders.commands[0]
        self.assertEqual([line.product_id for line in command.lines], [1])
        self.assertEqual(command.lines[0].quantity, 1)
        remaining = {line.product_id: line.quantity for line in self.cart().lines()}
        self.assertEqual(remaining, {"1": 1, "2": 1})

    def test_settlement_failure_keeps_cart(self):
        self.orders.error = DatabaseError("order_items insert failed")
        status = self.service.submit(self.user_id, "EXPRESS", "923456789")
        failed = self.service.confirm(status.attempt_id)
        self.assertEqual(failed.state, "FAILED")
        self.assertEqual(self.cart_ids(), ["1"])
        retried = self.service.retry(self.user_id)
        self.assertEqual(retried.state, "IDLE")
        self.assertEqual(self.cart_ids(), ["1"])

    def test_cancel_keeps_cart_and_stops_timer(self):
        self.service.submit(self.user_id, "EXPRESS", "923456789")
        status = self.service.cancel(self.user_id)
        self.assertEqual(status.state, "IDLE")
        self.assertEqual(self.cart_ids(), ["1"])
        self.assertEqual(self.scheduler.live, [])

    def test_invalid_destination_rejected_before_gateway(self):
        with self.assertRaises(CheckoutValidationError):
            self.service.submit(self.user_id, "EXPRESS", "12")
        self.assertEqual(self.service.status(self.user_id).state, "IDLE")
        self.assertEqual(self.gateway.requests, [])

    def test_empty_cart_rejected(self):
        self.cart().clear()
        with self.assertRaises(CheckoutValidationError):
            self.service.submit(self.user_id, "EXPRESS", "923456789")

    def test_gateway_failure_aborts_to_idle(self):
        self.gateway.error = PaymentGatewayError("timeout")
        with self.assertRaises(PaymentCollaboratorError):
            self.service.submit(self.user_id, "EXPRESS", "923456789")
        status = self.service.status(self.user_id)
        self.assertEqual(status.state, "IDLE")
        self.assertTrue(status.error)
        self.assertEqual(self.scheduler.handles, [])

    def test_timeout_then_confirmation_is_rejected(self):
        status = self.service.submit(self.user_id, "EXPRESS", "923456789")
        self.scheduler.advance(3)
        self.assertEqual(self.service.status(self.user_id).state, "TIMED_OUT")
        with self.assertRaises(InvalidTransitionError):
            self.service.confirm(status.attempt_id)
        self.assertEqual(self.orders.commands, [])
        self.assertEqual(self.cart_ids(), ["1"])

    def test_transfer_without_proof_rejected(self):
        with self.assertRaises(CheckoutValidationError):
            self.service.submit(self.user_id, "TRANSFER")
        self.assertEqual(self.service.status(self.user_id).state, "IDLE")

    def test_transfer_with_proof_succeeds(self):
        attached = self.service.attach_proof(self.user_id, "payment-proofs/7/abc.pdf")
        self.assertTrue(attached.has_proof)
        status = self.service.submit(self.user_id, "TRANSFER")
        self.assertEqual(status.state, "SUCCESS")
        self.assertEqual(self.verifier.calls, [("payment-proofs/7/abc.pdf", Decimal("52500"))])
        self.assertEqual(self.orders.commands[0].proof_reference, "payment-proofs/7/abc.pdf")
        self.assertEqual(self.cart_ids(), [])

    def test_rejected_proof_returns_to_idle_and_drops_it(self):
        self.verifier.result = False
        self.service.attach_proof(self.user_id, "payment-proofs/7/blurry.jpg")
        with self.assertRaises(CheckoutValidationError):
            self.service.submit(self.user_id, "TRANSFER")
        status = self.service.status(self.user_id)
        self.assertEqual(status.state, "IDLE")
        self.assertFalse(status.has_proof)

    def test_confirmation_for_unknown_attempt(self):
        with self.assertRaises(UnknownAttemptError):
            self.service.confirm("does-not-exist")

    def test_new_attempt_after_success(self):
        first = self.service.submit(self.user_id, "EXPRESS", "923456789")
        self.service.confirm(first.attempt_id)
        self.assertEqual(self.service.status(self.user_id).state, "SUCCESS")
        self.cart().add_item(product(2, "120000"))
        second = self.service.submit(self.user_id, "EXPRESS", "923456789")
        self.assertNotEqual(first.attempt_id, second.attempt_id)
        self.assertEqual(second.amount, Decimal("120000"))

    def test_attempts_are_isolated_per_user(self):
        self.service.submit(self.user_id, "EXPRESS", "923456789")
        self.assertEqual(self.service.status(8).state, "IDLE")
