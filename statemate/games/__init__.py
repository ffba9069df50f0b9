"""
Games module - Scenario implementations.

Each scenario has its own subpackage with:
- Catalogs (crises, actions, outcome tiers)
- Scenario spec definition
- Game setup
"""
