from apps.api.exceptions import ApplicationError
from apps.common.i18n import INVALID_QUANTITY, OPTION_CONFLICT


class InvalidQuantityError(ApplicationError):
    code = "VALIDATION_ERROR"
    default_message = INVALID_QUANTITY


class OptionConflictError(ApplicationError):
    code = "CONFLICT"
    default_message = OPTION_CONFLICT
