"""
Crisis Catalogs - Crisis events, actions and outcome tiers.

Catalog structure:
- 5 crises (flavor events, one per round)
- 4 actions, one per stat family, each with a trade-off
- 4 outcome tiers, ordered high to low

Crisis descriptions are display text only. Their stated effects are
realized through decay and action resolution, not applied directly.
"""

from __future__ import annotations

from ...spec_schema.scenario_spec import (
    CrisisDefinition,
    ActionDefinition,
    OutcomeTierDefinition,
)


# ============================================================================
# Crises
# ============================================================================

ECONOMIC_DOWNTURN = CrisisDefinition(
    title="Economic Downturn",
    description="Economy -25% | Social stability -10%",
    icon="TrendingDown",
)

SECURITY_THREAT = CrisisDefinition(
    title="Security Threat",
    description="Security -30% | Diplomacy +5%",
    icon="ShieldAlert",
)

INTERNATIONAL_CONFLICT = CrisisDefinition(
    title="International Conflict",
    description="Diplomacy -40% | Economy -15%",
    icon="Globe",
)

SOCIAL_PROTESTS = CrisisDefinition(
    title="Social Protests",
    description="Social -35% | Security -10%",
    icon="Users",
)

ENERGY_CRISIS = CrisisDefinition(
    title="Energy Crisis",
    description="Economy -20% | Social -15%",
    icon="Zap",
)

CRISES: list[CrisisDefinition] = [
    ECONOMIC_DOWNTURN,
    SECURITY_THREAT,
    INTERNATIONAL_CONFLICT,
    SOCIAL_PROTESTS,
    ENERGY_CRISIS,
]


# ============================================================================
# Actions
# ============================================================================

ECONOMY = ActionDefinition(
    action_id="economy",
    name="Economy",
    icon="DollarSign",
    effects={"economy": 15, "social": -5},
    color="bg-green-600",
)

SECURITY = ActionDefinition(
    action_id="security",
    name="Security",
    icon="Shield",
    effects={"security": 20, "economy": -5},
    color="bg-blue-600",
)

DIPLOMACY = ActionDefinition(
    action_id="diplomacy",
    name="Diplomacy",
    icon="Handshake",
    effects={"diplomacy": 18, "security": -5},
    color="bg-purple-600",
)

SOCIAL = ActionDefinition(
    action_id="social",
    name="Social",
    icon="Heart",
    effects={"social": 20, "economy": -5},
    color="bg-pink-600",
)

ACTIONS: list[ActionDefinition] = [ECONOMY, SECURITY, DIPLOMACY, SOCIAL]


# ============================================================================
# Outcome tiers (evaluated high to low, first match wins)
# ============================================================================

OUTCOME_TIERS: list[OutcomeTierDefinition] = [
    OutcomeTierDefinition(
        tier="victory",
        min_average=70,
        label="Ministers' Victory",
        icon="Trophy",
        color="text-green-600",
    ),
    OutcomeTierDefinition(
        tier="stability",
        min_average=50,
        label="Stability",
        icon="Scale",
        color="text-blue-600",
    ),
    OutcomeTierDefinition(
        tier="crisis",
        min_average=30,
        label="Crisis",
        icon="AlertTriangle",
        color="text-orange-600",
    ),
    OutcomeTierDefinition(
        tier="collapse",
        min_average=0,
        label="State Collapse",
        icon="Bomb",
        color="text-red-600",
    ),
]


def get_action_by_id(action_id: str) -> ActionDefinition | None:
    """Look up a built-in action by ID."""
    for action in ACTIONS:
        if action.action_id == action_id:
            return action
    return None
