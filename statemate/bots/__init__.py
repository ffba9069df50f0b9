"""
Bots module - Simulated participant policies.

Provides:
- ParticipantPolicy: Interface for choosing a vote
- RandomPolicy: Uniform-random choice (the only in-game policy)
- FirstActionPolicy: Deterministic choice for tests
"""

from .policy import ParticipantPolicy, VoteDecision, RandomPolicy, FirstActionPolicy

__all__ = [
    "ParticipantPolicy",
    "VoteDecision",
    "RandomPolicy",
    "FirstActionPolicy",
]
