from rest_framework import status

from apps.api.exceptions import ApplicationError
from apps.common.i18n import (
    CONFIRMATION_REJECTED,
    INVALID_CALLBACK_TOKEN,
    INVALID_TRANSITION,
    PAYMENT_REQUEST_FAILED,
)


class CheckoutValidationError(ApplicationError):
    code = "VALIDATION_ERROR"


class InvalidTransitionError(ApplicationError):
    code = "CONFLICT"
    default_message = INVALID_TRANSITION


class PaymentCollaboratorError(ApplicationError):
    code = "BAD_GATEWAY"
    default_message = PAYMENT_REQUEST_FAILED


class UnknownAttemptError(ApplicationError):
    code = "CONFLICT"
    default_message = CONFIRMATION_REJECTED


class InvalidCallbackTokenError(ApplicationError):
    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = INVALID_CALLBACK_TOKEN
