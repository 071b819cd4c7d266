"""Domain services."""

from .base import Service
from .flag_weight_bridge import FlagTransition, FlagWeightBridge
from .moderation_service import (
    FlagResult,
    ModerationCoordinator,
    ReconcileResult,
    VoteResult,
)
from .removal_policy import RemovalAssessment, RemovalPolicy, ThresholdPolicy
from .voting_engine import VoteTransition, VotingEngine

__all__ = [
    "FlagResult",
    "FlagTransition",
    "FlagWeightBridge",
    "ModerationCoordinator",
    "ReconcileResult",
    "RemovalAssessment",
    "RemovalPolicy",
    "Service",
    "ThresholdPolicy",
    "VoteResult",
    "VoteTransition",
    "VotingEngine",
]
