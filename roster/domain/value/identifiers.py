"""Strongly typed identifiers for Roster domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
