"""Domain value objects for Roster."""

from roster.domain.value.identifiers import UserId
from roster.domain.value.types import CustomData

__all__ = [
    "UserId",
    "CustomData",
]
