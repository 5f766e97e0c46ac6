"""
app/services/user_service.py

Purpose: User data management

- Resolves the current user record
- Persists onboarding profile fields (name, phone)
"""

from datetime import datetime
from typing import Any, Dict, Optional

from app.core.logging import get_logger, LogContext
from app.db.mongo import get_users_collection
from app.models.user import ProfileUpdate, User, UserRole

logger = get_logger(__name__)


def user_from_document(document: Dict[str, Any]) -> User:
    """
    Maps a users document to the User model.
    Unknown role values fall back to customer.
    """
    try:
        role = UserRole(document.get("role", UserRole.CUSTOMER.value))
    except ValueError:
        logger.warning(f"Unknown role {document.get('role')!r}, treating as customer")
        role = UserRole.CUSTOMER

    return User(
        id=document["user_id"],
        role=role,
        full_name=document.get("full_name"),
        phone_number=document.get("phone_number"),
    )


class MongoProfileStore:
    """
    Profile store bound to one caller.

    The caller's id comes from the request context; token handling
    happens upstream.
    """

    def __init__(self, user_id: Optional[str]):
        self.user_id = user_id

    async def resolve_current_user(self) -> Optional[User]:
        if not self.user_id:
            return None

        users = get_users_collection()
        document = await users.find_one({"user_id": self.user_id})
        if not document:
            with LogContext(user_id=self.user_id):
                logger.info("User not found")
            return None

        return user_from_document(document)

    async def update_profile(self, user_id: str, update: ProfileUpdate) -> None:
        """
        Overwrites full_name and phone_number. Repeating the same write is a
        no-op from the caller's point of view.

        Raises:
            LookupError: If no user record exists for user_id
        """
        with LogContext(user_id=user_id):
            users = get_users_collection()

            result = await users.update_one(
                {"user_id": user_id},
                {
                    "$set": {
                        "full_name": update.full_name,
                        "phone_number": update.phone_number,
                        "updated_at": datetime.utcnow(),
                    }
                }
            )

            # matched, not modified: an identical rewrite still counts
            if result.matched_count == 0:
                logger.warning("Profile update matched no user")
                raise LookupError(f"User {user_id} not found")

            logger.info("Profile fields updated")
