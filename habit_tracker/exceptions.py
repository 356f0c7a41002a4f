"""
Errors raised by habit-tracker

Every error carries a request id, a UTC timestamp and a short message that a
host app can show as-is. Errors write themselves to the module logger when
they are constructed, so callers only need to catch and render them.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)

GENERIC_USER_MESSAGE = "An error occurred. Please try again."


class HabitTrackerError(Exception):
    """
    Root of the habit-tracker error tree

    Example:
        raise RecordNotFoundError(
            "Tracker 42 does not exist",
            record_type="Tracker",
            record_id="42",
            operation="toggle_completion"
        )
    """

    def __init__(
        self,
        message: str,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or GENERIC_USER_MESSAGE
        self.timestamp = datetime.now(timezone.utc)

        self._log_error()

    @property
    def kind(self) -> str:
        return type(self).__name__

    def _log_error(self) -> None:
        # LogRecord reserves "message", so the text goes under "detail"
        extra = {
            "kind": self.kind,
            "detail": self.message,
            "request_id": self.request_id,
            "operation": self.operation,
            "context_data": dict(self.context),
        }
        if self.cause is not None:
            extra["caused_by"] = repr(self.cause)

        logger.error(f"{self.kind}: {self.message}", extra=extra, exc_info=self.cause)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form for host apps that report errors as JSON"""
        return {
            "error": self.kind,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat(),
            "message": self.message,
            "user_message": self.user_message,
        }


# ==========================================
# Validation Errors (User Input)
# ==========================================

class ValidationError(HabitTrackerError):
    """
    A tracker, category or completion value was rejected

    `field` names the offending input (e.g. "schedule", "date") and `value`
    keeps what was passed in.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


class FutureCompletionError(ValidationError):
    """Completion was requested for a day that has not happened yet"""

    def __init__(self, message: str = "Cannot complete a tracker in the future", **kwargs):
        super().__init__(message=message, field="date", **kwargs)
        self.user_message = "Trackers can only be marked for today or earlier."


# ==========================================
# Store Errors
# ==========================================

class RecordNotFoundError(HabitTrackerError):
    """Requested tracker, category or record does not exist"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(HabitTrackerError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The tracker is not properly configured.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def from_pydantic_error(
    error: Exception,
    operation: str,
    context: Optional[Dict[str, Any]] = None
) -> ValidationError:
    """
    Wrap a pydantic ValidationError into our exception hierarchy

    The first reported error decides the field and message.

    Example:
        try:
            Tracker(name=name, schedule=schedule, ...)
        except pydantic.ValidationError as e:
            raise from_pydantic_error(e, operation="create_tracker")
    """
    errors = error.errors() if hasattr(error, "errors") else []
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        message = first.get("msg", str(error))
        value = first.get("input")
    else:
        field, message, value = None, str(error), None

    wrapped = ValidationError(
        message=message,
        field=field,
        value=value,
        operation=operation,
        cause=error
    )
    wrapped.context.update(context or {})
    return wrapped
