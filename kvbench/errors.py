"""
Custom exceptions for kvbench.

This module provides custom exception classes with user-friendly messaging
that include:
- Clear error descriptions
- Technical details for debugging
- Actionable suggestions for resolution

Exceptions raised inside a phase (DeadlineExceeded, BackendOperationError,
DataIntegrityError) are classified by the Stats aggregator and never end the
run. StoreSetupError and ConfigurationError abort the run.
"""

from dataclasses import dataclass, field
from typing import Optional, Any
from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes for kvbench errors."""
    # Configuration errors (1xx)
    CONFIG_MISSING_REQUIRED = "E101"
    CONFIG_INVALID_VALUE = "E102"
    CONFIG_FILE_NOT_FOUND = "E103"
    CONFIG_PARSE_ERROR = "E104"

    # Backend errors (2xx)
    BACKEND_SETUP_FAILED = "E201"
    BACKEND_OPERATION_FAILED = "E202"

    # Phase errors (3xx)
    PHASE_DEADLINE_EXCEEDED = "E301"
    PHASE_DATA_INTEGRITY = "E302"

    # Internal errors (9xx)
    INTERNAL_ERROR = "E901"


@dataclass
class KVBenchError:
    """
    Structured error information for kvbench.

    Attributes:
        code: Machine-readable error code.
        message: User-facing error message.
        details: Technical details for debugging.
        suggestion: How to fix the issue.
        context: Additional context information.
    """
    code: ErrorCode
    message: str
    details: str = ""
    suggestion: str = ""
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        lines = [f"[{self.code.value}] {self.message}"]
        if self.details:
            lines.append(f"  Details: {self.details}")
        if self.suggestion:
            lines.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(lines)


class KVBenchException(Exception):
    """
    Base exception class for kvbench.

    All custom exceptions inherit from this class and provide
    structured error information.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR,
                 details: str = "", suggestion: str = "", **context):
        self.error = KVBenchError(
            code=code,
            message=message,
            details=details,
            suggestion=suggestion,
            context=context
        )
        super().__init__(str(self.error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def suggestion(self) -> str:
        return self.error.suggestion


class ConfigurationError(KVBenchException):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Non-positive worker count or phase duration
        - Unknown backend name
        - Config file not found or not valid YAML
    """

    def __init__(self, message: str, parameter: str = None,
                 expected: Any = None, actual: Any = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE):
        details_parts = []
        if parameter:
            details_parts.append(f"Parameter: {parameter}")
        if expected is not None:
            details_parts.append(f"Expected: {expected}")
        if actual is not None:
            details_parts.append(f"Actual: {actual}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            parameter=parameter,
            expected=expected,
            actual=actual
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.CONFIG_MISSING_REQUIRED: "Provide the required parameter via command line or config file",
            ErrorCode.CONFIG_INVALID_VALUE: "Check the parameter value and correct it",
            ErrorCode.CONFIG_FILE_NOT_FOUND: "Verify the config file path exists",
            ErrorCode.CONFIG_PARSE_ERROR: "Check config file syntax (YAML format)",
        }
        return suggestions.get(code, "Check the configuration and try again")


class StoreSetupError(KVBenchException):
    """
    Raised when a backend cannot be prepared before the first phase.

    This is the only failure that aborts a run once configuration is valid.
    """

    def __init__(self, message: str, backend: str = None, target: str = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.BACKEND_SETUP_FAILED):
        details_parts = []
        if backend:
            details_parts.append(f"Backend: {backend}")
        if target:
            details_parts.append(f"Target: {target}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            backend=backend,
            target=target
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.BACKEND_SETUP_FAILED: "Verify the backend is running and the --target connection string is correct",
        }
        return suggestions.get(code, "Check the backend and try again")


class BackendOperationError(KVBenchException):
    """
    Raised when a set or get call fails for a reason other than the phase deadline.

    Examples:
        - Connection refused or reset
        - Constraint violation
        - Pool exhausted before the deadline
    """

    def __init__(self, message: str, backend: str = None, operation: str = None,
                 key: str = None, code: ErrorCode = ErrorCode.BACKEND_OPERATION_FAILED):
        details_parts = []
        if backend:
            details_parts.append(f"Backend: {backend}")
        if operation:
            details_parts.append(f"Operation: {operation}")
        if key:
            details_parts.append(f"Key: {key}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            backend=backend,
            operation=operation,
            key=key
        )


class DataIntegrityError(KVBenchException):
    """
    Raised by the read-verify workload when a get returns an unexpected value.

    Counted the same way as BackendOperationError, but the backend answered:
    it answered with the wrong data.
    """

    def __init__(self, key: str, expected: str, actual: str,
                 code: ErrorCode = ErrorCode.PHASE_DATA_INTEGRITY):
        super().__init__(
            message=f"unexpected value for {key}: expected {expected!r}, got {actual!r}",
            code=code,
            key=key,
            expected=expected,
            actual=actual
        )
        self.key = key
        self.expected = expected
        self.actual = actual


class DeadlineExceeded(KVBenchException):
    """
    Raised when a call is attempted, or fails, after the phase deadline.

    This is normal end-of-phase noise and the Stats aggregator discards it.
    """

    def __init__(self, message: str = "phase deadline exceeded",
                 code: ErrorCode = ErrorCode.PHASE_DEADLINE_EXCEEDED):
        super().__init__(message=message, code=code)
