"""Error taxonomy and classification for cloud API failures."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..base import ItemFailure

# botocore error codes grouped by how an operator should read them
ACCESS_DENIED_CODES = (
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedOperation",
    "AuthFailure",
    "ExpiredToken",
    "ExpiredTokenException",
    "InvalidClientTokenId",
)
THROTTLING_CODES = (
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "SlowDown",
)
NOT_FOUND_CODES = (
    "ResourceNotFoundException",
    "NoSuchBucket",
    "InvalidInstanceID.NotFound",
    "InvalidInstanceID.Malformed",
)
INVALID_STATE_CODES = ("IncorrectInstanceState", "IncorrectState", "OperationNotPermitted")


class CloudOpsError(Exception):
    """Base class for every error raised by cloudops itself."""

    pass


class FetchError(CloudOpsError):
    """A paged-list operation failed (network, auth, malformed response)."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class MissingFieldError(FetchError):
    """The collaborator response lacked a field the caller depends on."""

    def __init__(self, field_name: str, context: str = "response"):
        super().__init__(f"missing {field_name} field in {context}")
        self.field_name = field_name


class ActionError(CloudOpsError):
    """A single batch-item action failed."""

    def __init__(self, item: Any, cause: BaseException):
        super().__init__(f"{item}: {type(cause).__name__}: {cause}")
        self.item = item
        self.cause = cause


class AggregateBatchFailure(CloudOpsError):
    """At least one item of a completed batch failed."""

    def __init__(self, failures: Sequence["ItemFailure[Any]"], attempted: int = 0):
        self.failures = list(failures)
        self.attempted = attempted
        failed = ", ".join(str(failure.input) for failure in self.failures)
        super().__init__(f"{len(self.failures)} of {attempted} items failed: {failed}")


@dataclass
class ErrorInfo:
    """Structured information about an error."""

    error_category: str
    error_code: str | None = None
    is_throttle: bool = False


class ErrorClassifier(ABC):
    """Abstract base class for classifying collaborator errors."""

    @abstractmethod
    def classify(self, exception: BaseException) -> ErrorInfo:
        """
        Classify an exception for reporting.

        Args:
            exception: The exception to classify

        Returns:
            ErrorInfo with classification details
        """
        pass


class DefaultErrorClassifier(ErrorClassifier):
    """Classifies botocore client errors by code, other errors by type."""

    def _client_error_code(self, exception: BaseException) -> str | None:
        """Return the AWS error code of a botocore ClientError, if it is one."""
        response = getattr(exception, "response", None)
        if not isinstance(response, dict):
            return None
        return response.get("Error", {}).get("Code")

    def classify(self, exception: BaseException) -> ErrorInfo:
        """Classify common errors with conservative defaults."""
        if isinstance(exception, MissingFieldError):
            return ErrorInfo(error_category="missing_field")

        # Unwrap our own wrappers so the cause decides the category
        if isinstance(exception, (FetchError, ActionError)) and exception.cause is not None:
            return self.classify(exception.cause)

        code = self._client_error_code(exception)
        if code is not None:
            if code in ACCESS_DENIED_CODES:
                return ErrorInfo(error_category="access_denied", error_code=code)
            if code in THROTTLING_CODES:
                return ErrorInfo(error_category="throttled", error_code=code, is_throttle=True)
            if code in NOT_FOUND_CODES:
                return ErrorInfo(error_category="not_found", error_code=code)
            if code in INVALID_STATE_CODES:
                return ErrorInfo(error_category="invalid_state", error_code=code)
            return ErrorInfo(error_category="client_error", error_code=code)

        error_str = str(exception).lower()
        if isinstance(exception, TimeoutError) or "timed out" in error_str:
            return ErrorInfo(error_category="timeout")

        # botocore's EndpointConnectionError is not a ConnectionError subclass
        if isinstance(exception, ConnectionError) or "could not connect" in error_str:
            return ErrorInfo(error_category="connection_error")

        if type(exception).__name__ in ("NoCredentialsError", "PartialCredentialsError"):
            return ErrorInfo(error_category="no_credentials")

        return ErrorInfo(error_category="unknown")
