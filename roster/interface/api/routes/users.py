"""User CRUD routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status

from roster.domain.error import ConflictError, NotFoundError, StorageUnavailableError
from roster.domain.model import CreateUser, User
from roster.domain.repository import UserRepository
from roster.domain.value import UserId
from roster.interface.error import HTTPError

router = APIRouter(prefix="/v1/user", tags=["users"], route_class=DishkaRoute)


def _parse_user_id(raw: str) -> UserId:
    """Parse a path segment as a user ID; malformed IDs count as not found."""
    try:
        return UserId(UUID(raw))
    except ValueError:
        raise HTTPError("Invalid Uuid", status.HTTP_404_NOT_FOUND)


def _unavailable(e: StorageUnavailableError) -> HTTPError:
    return HTTPError(str(e), status.HTTP_502_BAD_GATEWAY)


@router.get("", response_model=list[User])
async def list_users(user_repository: FromDishka[UserRepository]) -> list[User]:
    """List all users.

    Example:
        GET /v1/user

        Response:
        [
            {
                "id": "71802ecd-4eb3-4381-af7e-f737e3a35d5d",
                "email": "teste@teste.com",
                "name": "Meu nome",
                "birth_date": "1977-03-10",
                "custom_data": {"random": 1},
                "created_at": "2025-01-15T12:34:56Z",
                "updated_at": null
            }
        ]
    """
    try:
        return await user_repository.get_all()
    except StorageUnavailableError as e:
        raise _unavailable(e) from e


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str, user_repository: FromDishka[UserRepository]
) -> User:
    """Get a user by ID.

    Raises:
        HTTPError: 404 if the ID is malformed or unknown
    """
    try:
        return await user_repository.get_by_id(_parse_user_id(user_id))
    except NotFoundError as e:
        raise HTTPError(str(e), status.HTTP_404_NOT_FOUND) from e
    except StorageUnavailableError as e:
        raise _unavailable(e) from e


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUser, user_repository: FromDishka[UserRepository]
) -> User:
    """Create a user.

    Raises:
        HTTPError: 422 if the email is already in use
    """
    try:
        return await user_repository.create(request)
    except ConflictError as e:
        raise HTTPError(str(e), status.HTTP_422_UNPROCESSABLE_ENTITY) from e
    except StorageUnavailableError as e:
        raise _unavailable(e) from e


@router.put("", response_model=User)
async def update_user(
    request: User, user_repository: FromDishka[UserRepository]
) -> User:
    """Replace a user identified by the ``id`` in the body.

    Raises:
        HTTPError: 422 if the user does not exist or the email is taken
    """
    try:
        return await user_repository.update(request)
    except (NotFoundError, ConflictError) as e:
        raise HTTPError(str(e), status.HTTP_422_UNPROCESSABLE_ENTITY) from e
    except StorageUnavailableError as e:
        raise _unavailable(e) from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str, user_repository: FromDishka[UserRepository]
) -> Response:
    """Delete a user. Deleting an unknown user also answers 204."""
    try:
        await user_repository.delete(_parse_user_id(user_id))
    except StorageUnavailableError as e:
        raise _unavailable(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
