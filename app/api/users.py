"""
app/api/users.py

Purpose: Users REST endpoints

- GET/POST /usuarios, PUT/DELETE /usuarios/{id}
- Builds the user service from the injected store and notifier
- Domain errors are rendered by the handlers in app/core/errors.py
"""

from fastapi import APIRouter, Depends, Response, status
from typing import Any, Dict, List, Optional

from app.core.logging import get_logger
from app.db.json_store import DocumentStore, get_store
from app.schemas.user import UserCreate, UserUpdate
from app.services.notification_service import NotificationService, get_notifier
from app.services.user_service import UserService

logger = get_logger(__name__)
router = APIRouter()


def get_user_service(
    store: DocumentStore = Depends(get_store),
    notifier: NotificationService = Depends(get_notifier),
) -> UserService:
    return UserService(store, notifier)


@router.get("/usuarios")
async def list_users(service: UserService = Depends(get_user_service)) -> List[Dict[str, Any]]:
    """
    Returns the full user collection in insertion order.
    """
    return await service.list_users()


@router.post("/usuarios", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Optional[UserCreate] = None,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """
    Registers a user and sends the welcome email.

    400 when required fields are missing, age is below 18
    or the email is already registered.
    """
    return await service.create_user(payload if payload is not None else UserCreate())


@router.put("/usuarios/{user_id}")
async def update_user(
    user_id: int,
    payload: Optional[UserUpdate] = None,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """
    Partially updates a user; only truthy fields overwrite.
    """
    return await service.update_user(user_id, payload if payload is not None else UserUpdate())


@router.delete("/usuarios/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
