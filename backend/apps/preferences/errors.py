from apps.api.exceptions import ApplicationError
from apps.common.i18n import INVALID_SCREEN


class InvalidScreenError(ApplicationError):
    code = "VALIDATION_ERROR"
    default_message = INVALID_SCREEN
