"""
Error taxonomy for the security layer.

Encryption errors propagate to the immediate caller, which maps them into
user-facing failures. The rate limiter has no error channel and logging
failures never leave the logger, so only configuration and authentication
faults are modelled here.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(str, Enum):
    """Error severity levels for categorization and alerting"""

    LOW = "low"  # Minor issues, logging only
    MEDIUM = "medium"  # Important issues, monitoring alerts
    HIGH = "high"  # Critical issues, immediate attention
    CRITICAL = "critical"  # System-threatening issues, emergency response


class ErrorCategory(str, Enum):
    """Error categories for systematic handling"""

    CONFIGURATION = "configuration"  # Config/setup errors
    AUTHENTICATION = "authentication"  # Tampered or corrupted ciphertext
    VALIDATION = "validation"  # Input validation errors
    SYSTEM = "system"  # System/infrastructure errors


class SecurityLayerError(Exception):
    """Base exception for security layer errors"""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        technical_details: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[list] = None,
    ):
        super().__init__(message)
        self.severity = severity
        self.category = category
        self.technical_details = technical_details or {}
        self.recovery_suggestions = recovery_suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary for logging/serialization"""
        return {
            "error_type": type(self).__name__,
            "error_message": str(self),
            "severity": self.severity.value,
            "category": self.category.value,
            "technical_details": self.technical_details,
            "recovery_suggestions": self.recovery_suggestions,
        }


class ConfigurationError(SecurityLayerError):
    """Raised when the master encryption key is missing or too short"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "recovery_suggestions",
            [
                "Set ENCRYPTION_KEY in the environment or .env file",
                "Use at least 32 bytes of key material",
            ],
        )
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.CONFIGURATION,
            **kwargs,
        )


class AuthenticationFailure(SecurityLayerError):
    """Raised when an encrypted blob fails verification or is malformed"""

    def __init__(
        self, message: str = "Encrypted value failed authentication", **kwargs
    ):
        kwargs.setdefault(
            "recovery_suggestions",
            [
                "Re-enter the secret; the stored value is corrupted or was tampered with",
                "Check that ENCRYPTION_KEY matches the key used to encrypt the value",
            ],
        )
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.AUTHENTICATION,
            **kwargs,
        )
