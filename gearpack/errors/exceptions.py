"""Custom exception hierarchy for gear catalog and packing plan errors."""
from typing import Any, Dict, Optional


class GearPackError(Exception):
    """Base exception for all gearpack errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with message and optional context."""
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PlanValidationError(GearPackError):
    """Raised when an AI packing plan payload does not match the schema."""
    pass


class ReviewSelectionError(GearPackError):
    """Raised when a review selection references a catalog item that was not offered."""
    pass


class ConfigurationError(GearPackError):
    """Raised when configuration is invalid."""
    pass
