"""Flag use cases."""

from .set_flag import SetFlagRequest, SetFlagResponse, SetFlagUseCase

__all__ = [
    "SetFlagRequest",
    "SetFlagResponse",
    "SetFlagUseCase",
]
