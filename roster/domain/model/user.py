"""User aggregate root and its creation payload."""

from datetime import date, datetime
from typing import Optional

from roster.domain.model.common import DomainModel
from roster.domain.value import CustomData, UserId


class CreateUser(DomainModel):
    """Payload for creating a user.

    Identity and timestamps are assigned by the repository; any such
    fields sent by a caller are ignored.
    """

    email: str
    name: str
    birth_date: date
    custom_data: CustomData


class User(DomainModel):
    """User aggregate root.

    ``email`` is unique among live users. ``created_at`` is set once on
    creation and survives every update; ``updated_at`` stays ``None``
    until the first update.
    """

    id: UserId
    email: str
    name: str
    birth_date: date
    custom_data: CustomData
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
