"""Domain value objects for Roster."""

from roster.domain.value.common import ValueObject


class CustomData(ValueObject):
    """Structured payload embedded in a user.

    Carried through unchanged except on an explicit update.
    """

    random: int
