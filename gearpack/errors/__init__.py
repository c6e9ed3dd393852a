"""Error handling module."""
from gearpack.errors.exceptions import (
    GearPackError,
    PlanValidationError,
    ReviewSelectionError,
    ConfigurationError,
)

__all__ = [
    "GearPackError",
    "PlanValidationError",
    "ReviewSelectionError",
    "ConfigurationError",
]
