"""Scenario specification schema - catalog and rule definitions."""

from .scenario_spec import (
    STAT_NAMES,
    ScenarioSpec,
    CrisisDefinition,
    ActionDefinition,
    OutcomeTierDefinition,
)
from .validation import validate_catalog, CatalogValidationError, ValidationResult

__all__ = [
    "STAT_NAMES",
    "ScenarioSpec",
    "CrisisDefinition",
    "ActionDefinition",
    "OutcomeTierDefinition",
    "validate_catalog",
    "CatalogValidationError",
    "ValidationResult",
]
