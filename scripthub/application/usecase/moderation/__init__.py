"""Moderation use cases."""

from .get_moderation_status import (
    GetModerationStatusRequest,
    GetModerationStatusResponse,
    GetModerationStatusUseCase,
)
from .reconcile_counters import (
    CountersSnapshot,
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
)

__all__ = [
    "CountersSnapshot",
    "GetModerationStatusRequest",
    "GetModerationStatusResponse",
    "GetModerationStatusUseCase",
    "ReconcileCountersRequest",
    "ReconcileCountersResponse",
    "ReconcileCountersUseCase",
]
