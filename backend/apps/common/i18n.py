from __future__ import annotations

from django.utils.translation import gettext_lazy as _

# User-visible messages. Kept in one place so makemessages can extract them
# even when they only reach clients through error_response.
PRODUCT_NOT_FOUND = _("Product not found")
ORDER_NOT_FOUND = _("Order not found")
NOTIFICATION_NOT_FOUND = _("Notification not found")
AUTHENTICATION_REQUIRED = _("Authentication required")
OUT_OF_STOCK = _("This product is out of stock")
INVALID_QUANTITY = _("Quantity must be a positive whole number")
OPTION_CONFLICT = _("This product is already in the cart with a different selection")
EMPTY_CART = _("Your cart is empty")
INVALID_PHONE = _("Enter a valid number (9 digits)")
PROOF_REQUIRED = _("Please upload the transfer receipt")
LOGIN_REQUIRED_FOR_CHECKOUT = _("Please sign in to complete the purchase")
INVALID_CHANNEL = _("Choose a payment method")
INVALID_TRANSITION = _("This payment step is not available right now")
PAYMENT_REQUEST_FAILED = _("Could not reach the payment network. Try again.")
TRANSFER_NOT_VERIFIED = _("The transfer receipt could not be verified")
ORDER_PERSIST_FAILED = _("Error saving your order. Contact support.")
CONFIRMATION_REJECTED = _("Confirmation does not match an active payment")
INVALID_CALLBACK_TOKEN = _("Invalid payment callback token")
PAYMENT_EXPIRED = _("Confirmation was not detected in time. Try again.")
REVIEW_NOT_ALLOWED = _("Only pending products can be reviewed")
DELIVERY_STEP_NOT_ALLOWED = _("This delivery step is not available for the order")
DELIVERY_NOT_ASSIGNED = _("This delivery is assigned to another courier")
INVALID_DELIVERY_SCOPE = _('Scope must be "mine" or "available"')
PERMISSION_DENIED = _("You do not have permission to perform this action")
INVALID_SCREEN = _("Unknown screen")
SOMETHING_WENT_WRONG = _("Something went wrong")

TRANSLATABLE_ERROR_MESSAGES = (
    PRODUCT_NOT_FOUND,
    ORDER_NOT_FOUND,
    NOTIFICATION_NOT_FOUND,
    AUTHENTICATION_REQUIRED,
    OUT_OF_STOCK,
    INVALID_QUANTITY,
    OPTION_CONFLICT,
    EMPTY_CART,
    INVALID_PHONE,
    PROOF_REQUIRED,
    LOGIN_REQUIRED_FOR_CHECKOUT,
    INVALID_CHANNEL,
    INVALID_TRANSITION,
    PAYMENT_REQUEST_FAILED,
    TRANSFER_NOT_VERIFIED,
    ORDER_PERSIST_FAILED,
    CONFIRMATION_REJECTED,
    INVALID_CALLBACK_TOKEN,
    PAYMENT_EXPIRED,
    REVIEW_NOT_ALLOWED,
    DELIVERY_STEP_NOT_ALLOWED,
    DELIVERY_NOT_ASSIGNED,
    INVALID_DELIVERY_SCOPE,
    PERMISSION_DENIED,
    INVALID_SCREEN,
    SOMETHING_WENT_WRONG,
)


__all__ = [
    "TRANSLATABLE_ERROR_MESSAGES",
]
