"""User repository interface."""

from abc import ABC, abstractmethod

from roster.domain.model.user import CreateUser, User
from roster.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations. Every
    implementation raises the same errors for the same conditions:

    - ``NotFoundError`` when the id or email has no live user
    - ``ConflictError`` when a write would duplicate an email
    - ``StorageUnavailableError`` when the store cannot be reached

    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def get_all(self) -> list[User]:
        """Get all users.

        Returns:
            Every live user, possibly an empty list
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> User:
        """Get a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user

        Raises:
            NotFoundError: If no user has this ID
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> User:
        """Get a user by their email.

        Args:
            email: The user's email address

        Returns:
            The user

        Raises:
            NotFoundError: If no user has this email
        """
        pass

    @abstractmethod
    async def create(self, user: CreateUser) -> User:
        """Create a user.

        The repository assigns the ID and ``created_at``.

        Args:
            user: The creation payload

        Returns:
            The created user

        Raises:
            ConflictError: If the email is already in use
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Replace a user's email, name, birth date and custom data.

        ``created_at`` is kept from the stored record and ``updated_at``
        is stamped with the current time.

        Args:
            user: The full user, identified by its ID

        Returns:
            The updated user

        Raises:
            NotFoundError: If no user has this ID
            ConflictError: If the email belongs to a different user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> UserId:
        """Delete a user.

        Deleting an unknown ID is not an error.

        Args:
            user_id: The user's unique identifier

        Returns:
            The given ID
        """
        pass
