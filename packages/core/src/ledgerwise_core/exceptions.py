"""Custom exceptions for the Ledgerwise engine.

This module provides a hierarchy of exception classes for consistent error
handling across the aggregation and projection engine. All exceptions inherit
from LedgerwiseError, making it easy to catch all engine-specific errors.

Every error is a local precondition failure raised synchronously by the call
that violated it. Nothing here is retried by the engine.

Example:
    try:
        transition = mark_paid(payment)
    except InvalidPaymentStateError as e:
        logger.warning("payment_rejected", **e.details)
    except LedgerwiseError as e:
        # Handle any engine-related error
        logger.error(f"Operation failed: {e}")
"""

from typing import Any, Optional


class LedgerwiseError(Exception):
    """Base exception for all Ledgerwise engine errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all engine-specific errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise LedgerwiseError("Something went wrong", details={"code": 500})
        LedgerwiseError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize LedgerwiseError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the caller can fix the input and try again.
                Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    @property
    def kind(self) -> str:
        """Short error kind name, e.g. ``UnsupportedFrequency``."""
        name = self.__class__.__name__
        return name[: -len("Error")] if name.endswith("Error") else name

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class UnsupportedFrequencyError(LedgerwiseError):
    """Error raised when a cadence cannot be used for the requested operation.

    Raised when a one-time amount is passed to monthly normalization or date
    advancing, and when a frequency string is not part of the vocabulary.

    Attributes:
        frequency: The offending frequency value.

    Example:
        >>> raise UnsupportedFrequencyError(
        ...     "One-time amounts have no monthly equivalent",
        ...     frequency="one-time",
        ... )
        UnsupportedFrequencyError: One-time amounts have no monthly equivalent
    """

    def __init__(
        self,
        message: str,
        *,
        frequency: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize UnsupportedFrequencyError.

        Args:
            message: Human-readable error description.
            frequency: The frequency that was rejected.
            details: Optional dictionary with additional context.
            recoverable: Defaults to True since the caller can exclude the
                record or pick a supported cadence.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.frequency = frequency

        if frequency is not None:
            self.details["frequency"] = str(getattr(frequency, "value", frequency))


class InvalidPaymentStateError(LedgerwiseError):
    """Error raised when a Paid/Skip transition targets an unusable payment.

    Attributes:
        payment_id: Identifier of the recurring payment.
        reason: Why the transition was refused (``inactive`` or ``unknown``).

    Example:
        >>> raise InvalidPaymentStateError(
        ...     "Cannot mark an inactive payment as paid",
        ...     payment_id="rent",
        ...     reason="inactive",
        ... )
        InvalidPaymentStateError: Cannot mark an inactive payment as paid
    """

    def __init__(
        self,
        message: str,
        *,
        payment_id: Optional[str] = None,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize InvalidPaymentStateError.

        Args:
            message: Human-readable error description.
            payment_id: Identifier of the payment that was rejected.
            reason: Short reason code.
            details: Optional dictionary with additional context.
            recoverable: Defaults to False; the payment must be reactivated
                or reloaded by the caller first.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.payment_id = payment_id
        self.reason = reason

        if payment_id is not None:
            self.details["payment_id"] = payment_id
        if reason:
            self.details["reason"] = reason


class InvalidBudgetAmountError(LedgerwiseError):
    """Error raised when a budget cannot be used as a denominator.

    Attributes:
        budget_id: Identifier of the budget.
        category: Category the budget applies to.
        amount: The zero or negative amount.
    """

    def __init__(
        self,
        message: str,
        *,
        budget_id: Optional[str] = None,
        category: Optional[str] = None,
        amount: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize InvalidBudgetAmountError.

        Args:
            message: Human-readable error description.
            budget_id: Identifier of the offending budget.
            category: Category of the offending budget.
            amount: The rejected amount.
            details: Optional dictionary with additional context.
            recoverable: Defaults to True since the user can correct the budget.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.budget_id = budget_id
        self.category = category
        self.amount = amount

        if budget_id is not None:
            self.details["budget_id"] = budget_id
        if category:
            self.details["category"] = category
        if amount is not None:
            self.details["amount"] = str(amount)


class InvalidProjectionHorizonError(LedgerwiseError):
    """Error raised when a projection is requested for a non-positive horizon.

    Attributes:
        months: The rejected month count.
    """

    def __init__(
        self,
        message: str,
        *,
        months: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize InvalidProjectionHorizonError.

        Args:
            message: Human-readable error description.
            months: The rejected horizon.
            details: Optional dictionary with additional context.
            recoverable: Defaults to True since a valid horizon can be chosen.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.months = months

        if months is not None:
            self.details["months"] = months


class LedgerwiseValidationError(LedgerwiseError):
    """Error raised when an engine precondition other than the above fails.

    Examples are an inverted period (start after end) or an unknown tax
    country.

    Attributes:
        field: The argument that failed validation.
        value: The invalid value.
        constraint: The validation constraint that was violated.

    Example:
        >>> raise LedgerwiseValidationError(
        ...     "Period start must not be after period end",
        ...     field="period_start",
        ...     constraint="period_start <= period_end",
        ... )
        LedgerwiseValidationError: Period start must not be after period end
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize LedgerwiseValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the argument that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Defaults to True since validation errors typically
                require caller correction.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = str(value)
        if constraint:
            self.details["constraint"] = constraint


class ConfigurationError(LedgerwiseError):
    """Error raised when engine configuration is invalid.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid log level",
        ...     config_key="LEDGERWISE_LOG_LEVEL",
        ...     expected="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        ... )
        ConfigurationError: Invalid log level
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            config_key: The name of the configuration key that is problematic.
            expected: Description of what value was expected.
            actual: The actual value found.
            details: Optional dictionary with additional context.
            recoverable: Defaults to False since configuration errors
                require fixing the environment.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "LedgerwiseError",
    "UnsupportedFrequencyError",
    "InvalidPaymentStateError",
    "InvalidBudgetAmountError",
    "InvalidProjectionHorizonError",
    "LedgerwiseValidationError",
    "ConfigurationError",
]
