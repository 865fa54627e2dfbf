"""User API router with CRUD operations."""

from fastapi import APIRouter, Depends, status

from src.userapi.api.http.deps import get_user_service
from src.userapi.core.services import UserService
from src.userapi.entities.user import User, UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[User])
def list_users(service: UserService = Depends(get_user_service)) -> list[User]:
    """List all users."""
    return service.list_users()


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> User:
    """Create a new user."""
    return service.create_user(payload)


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> User:
    """Get a user by ID."""
    return service.get_user(user_id)


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: int,
    payload: UserUpdate | None = None,
    service: UserService = Depends(get_user_service),
) -> User:
    """Update the supplied fields of a user. A missing body changes nothing."""
    return service.update_user(
        user_id, payload if payload is not None else UserUpdate()
    )


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> dict[str, str]:
    """Delete a user."""
    service.delete_user(user_id)
    return {"message": "User deleted successfully"}
