from showlist.api.middleware.error_handler import (
    ErrorHandlingMiddleware,
    register_error_handlers,
    showlist_error_handler,
    validation_error_handler,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "register_error_handlers",
    "showlist_error_handler",
    "validation_error_handler",
]
