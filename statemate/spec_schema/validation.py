"""
Spec Validation - Schema validation for scenario specifications.

Validates that:
1. Required fields are present
2. Catalog entries reference known stats
3. Action IDs are unique
4. Invariants hold (initial stats in range, tiers ordered, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass

from .scenario_spec import (
    STAT_NAMES,
    ScenarioSpec,
    ActionDefinition,
    OutcomeTierDefinition,
)


class CatalogValidationError(Exception):
    """Raised when scenario validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Scenario validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalog(spec: ScenarioSpec, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a complete scenario specification.

    Returns ValidationResult with errors and warnings.
    Raises CatalogValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not spec.scenario_id:
        errors.append("scenario_id is required")
    if spec.max_rounds < 1:
        errors.append("max_rounds must be >= 1")
    if spec.round_seconds < 1:
        errors.append("round_seconds must be >= 1")
    if spec.simulated_participants < 0:
        errors.append("simulated_participants must be >= 0")

    errors.extend(_validate_stat_map("initial_stats", spec.initial_stats, require_all=True))
    for stat, value in spec.initial_stats.items():
        if not 0 <= value <= 100:
            errors.append(f"initial_stats.{stat} = {value} is outside [0, 100]")
    errors.extend(_validate_stat_map("decay", spec.decay))

    if not spec.crises:
        errors.append("At least one crisis is required")

    seen_ids: set[str] = set()
    for action in spec.actions:
        if action.action_id in seen_ids:
            errors.append(f"Duplicate action_id '{action.action_id}'")
        seen_ids.add(action.action_id)
        errors.extend(_validate_action(action))
    if not spec.actions:
        errors.append("At least one action is required")

    errors.extend(_validate_tiers(spec.outcome_tiers))

    if len(spec.crises) == 1:
        warnings.append("Only one crisis defined - every round will repeat it")

    result = ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )
    if raise_on_error and not result.valid:
        raise CatalogValidationError(errors)
    return result


def _validate_stat_map(
    label: str, values: dict[str, int], require_all: bool = False
) -> list[str]:
    errors = []
    for stat in values:
        if stat not in STAT_NAMES:
            errors.append(f"{label} references unknown stat '{stat}'")
    if require_all:
        for stat in STAT_NAMES:
            if stat not in values:
                errors.append(f"{label} is missing stat '{stat}'")
    return errors


def _validate_action(action: ActionDefinition) -> list[str]:
    """Validate a single action definition."""
    errors = []
    if not action.action_id:
        errors.append("Action has empty action_id")
    if not action.name:
        errors.append(f"Action '{action.action_id}' has empty name")
    if not action.effects:
        errors.append(f"Action '{action.action_id}' has no effects")
    errors.extend(
        f"Action '{action.action_id}': {e}"
        for e in _validate_stat_map("effects", action.effects)
    )
    return errors


def _validate_tiers(tiers: list[OutcomeTierDefinition]) -> list[str]:
    """Tiers must be listed high-to-low and end with a catch-all band."""
    errors = []
    if not tiers:
        return ["At least one outcome tier is required"]

    thresholds = [tier.min_average for tier in tiers]
    if thresholds != sorted(thresholds, reverse=True):
        errors.append("Outcome tiers must be ordered by min_average, highest first")
    if thresholds[-1] > 0:
        errors.append("Lowest outcome tier must accept an average of 0")

    names = [tier.tier for tier in tiers]
    if len(set(names)) != len(names):
        errors.append("Outcome tier names must be unique")
    return errors
