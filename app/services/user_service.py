"""
app/services/user_service.py

Purpose: User data management

- List, create, update and delete user records
- Required-field, age and email-uniqueness checks on creation
- Persists the whole collection through the document store
- Sends the welcome email after a successful creation
"""

import time
from typing import Any, Dict, List, Optional

from app.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from app.core.logging import get_logger, LogContext
from app.db.json_store import DocumentStore
from app.models.user import MIN_AGE, User, document_key
from app.schemas.user import UserCreate, UserUpdate
from app.services.notification_service import NotificationService

logger = get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Campos obligatorios incompletos"
AGE_OUT_OF_RANGE_MESSAGE = "Edad fuera de rango"
EMAIL_TAKEN_MESSAGE = "El correo ya está registrado"
USER_NOT_FOUND_MESSAGE = "Usuario no encontrado"
READ_FAILED_MESSAGE = "Error al leer el archivo"


def next_user_id(users: List[Dict[str, Any]], now_ms: Optional[int] = None) -> int:
    """
    Returns a new id: the current time in milliseconds, bumped past the
    highest existing id so two creations in the same millisecond never collide.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000

    ids = [user["id"] for user in users if isinstance(user.get("id"), int)]
    if ids and now_ms <= max(ids):
        return max(ids) + 1
    return now_ms


def find_user_index(users: List[Dict[str, Any]], user_id: int) -> Optional[int]:
    for index, user in enumerate(users):
        if user.get("id") == user_id:
            return index
    return None


class UserService:
    """
    Read-modify-write operations over the user collection.
    """

    def __init__(self, store: DocumentStore, notifier: NotificationService):
        self.store = store
        self.notifier = notifier

    async def list_users(self) -> List[Dict[str, Any]]:
        """
        Returns every user in insertion order.

        Raises:
            StorageError: If the users document cannot be read
        """
        try:
            return await self.store.load_all()
        except StorageError as e:
            raise StorageError(READ_FAILED_MESSAGE, details=e.details) from e

    async def create_user(self, payload: UserCreate) -> Dict[str, Any]:
        """
        Validates and stores a new user, then sends the welcome email.

        Args:
            payload: Incoming user fields

        Returns:
            The stored record including its assigned id

        Raises:
            ValidationError: Missing required fields or age below the minimum
            ConflictError: Email already registered
            StorageError: The users document could not be read or written
        """
        with LogContext(email=payload.email, operation="create"):
            missing = payload.missing_required()
            if missing:
                logger.info(f"Rejected user creation, missing: {', '.join(missing)}")
                raise ValidationError(MISSING_FIELDS_MESSAGE)

            if payload.age is not None and payload.age < MIN_AGE:
                logger.info(f"Rejected user creation, age {payload.age} below {MIN_AGE}")
                raise ValidationError(AGE_OUT_OF_RANGE_MESSAGE)

            users = await self.store.load_all()

            email_key = document_key("email")
            if any(user.get(email_key) == payload.email for user in users):
                logger.info("Rejected user creation, email already registered")
                raise ConflictError(EMAIL_TAKEN_MESSAGE)

            user = User(
                id=next_user_id(users),
                name=payload.name,
                email=payload.email,
                password=payload.password,
                age=payload.age,
                country=payload.country,
                phone=payload.phone
            ).to_document()

            users.append(user)
            await self.store.save_all(users)
            logger.info("New user created successfully", extra={"user_id": user["id"]})

            await self._send_welcome_email(payload.email)

            return user

    async def update_user(self, user_id: int, payload: UserUpdate) -> Dict[str, Any]:
        """
        Overwrites the fields present in the payload; others stay unchanged.
        Age range and email uniqueness are not re-checked here.

        Raises:
            NotFoundError: No user with that id
            StorageError: The users document could not be read or written
        """
        with LogContext(user_id=user_id, operation="update"):
            users = await self.store.load_all()

            index = find_user_index(users, user_id)
            if index is None:
                logger.info("User not found for update")
                raise NotFoundError(USER_NOT_FOUND_MESSAGE)

            changes = payload.changes()
            for field, value in changes.items():
                users[index][document_key(field)] = value

            await self.store.save_all(users)
            logger.info(f"User updated: {', '.join(changes) or 'no changes'}")

            return users[index]

    async def delete_user(self, user_id: int) -> None:
        """
        Removes a user from the collection.

        Raises:
            NotFoundError: No user with that id
            StorageError: The users document could not be read or written
        """
        with LogContext(user_id=user_id, operation="delete"):
            users = await self.store.load_all()

            index = find_user_index(users, user_id)
            if index is None:
                logger.info("User not found for deletion")
                raise NotFoundError(USER_NOT_FOUND_MESSAGE)

            del users[index]
            await self.store.save_all(users)
            logger.info("User deleted")

    async def _send_welcome_email(self, email: str) -> None:
        # Runs after the record is persisted; failures never reach the caller
        try:
            result = await self.notifier.send_welcome_email(email)
        except Exception as e:
            logger.error(f"Welcome email failed: {e}", exc_info=True)
            return

        if not result or not result.get("success"):
            logger.warning(f"Welcome email not delivered: {(result or {}).get('error')}")
