"""
Statemate - Political Crisis Round Engine

A deterministic, timer-driven engine for a short turn-based political
crisis game. The engine provides:
- Bounded four-stat state (economy, security, diplomacy, social)
- Crisis and action catalogs
- Round lifecycle driven by an injectable tick source
- Vote aggregation with simulated participants and diversion mode
- End-of-game outcome classification
"""

__version__ = "0.1.0"
