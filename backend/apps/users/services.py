from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.db import IntegrityError

from apps.common import get_logger
from .dtos import UserDTO, user_to_dto
from .protocols import UserRepositoryProtocol

logger = get_logger(__name__).bind(component="users", layer="service")

ServiceError = Tuple[str, str, Optional[Any]]


class UserService:
    def __init__(self, users: UserRepositoryProtocol):
        self.users = users
        self.logger = logger.bind(service="UserService")

    def register(
        self, data: Dict[str, Any]
    ) -> Tuple[Optional[UserDTO], Optional[ServiceError]]:
        username = data.get("username")
        email = data.get("email")
        self.logger.info("Registering user", username=username, role=data.get("role"))
        conflicts = {}
        if self.users.exists(username=username):
            conflicts["username"] = "Username already taken"
        if self.users.exists(email__iexact=email):
            conflicts["email"] = "Email already registered"
        if conflicts:
            self.logger.warning("Registration rejected", username=username, fields=sorted(conflicts))
            return None, ("VALIDATION_ERROR", "Unique constraint violated", conflicts)
        try:
            user = self.users.create_user(**data)
        except IntegrityError as exc:
            self.logger.warning(
                "Registration failed due to integrity error",
                username=username,
                error=str(exc),
            )
            return None, (
                "VALIDATION_ERROR",
                "Unique constraint violated",
                {"detail": str(exc)},
            )
        self.logger.info("User registered", user_id=user.id)
        return user_to_dto(user), None

    def get_profile(self, user_id: int) -> Optional[UserDTO]:
        self.logger.debug("Fetching profile", user_id=user_id)
        user = self.users.get(id=user_id)
        if not user:
            self.logger.info("Profile not found", user_id=user_id)
            return None
        return user_to_dto(user)

    def update_profile(self, user_id: int, data: Dict[str, Any]) -> Optional[UserDTO]:
        self.logger.info("Updating profile", user_id=user_id, fields=sorted(data))
        user = self.users.get(id=user_id)
        if not user:
            self.logger.warning("Profile update failed: not found", user_id=user_id)
            return None
        if data:
            user = self.users.update(user, **data)
        return user_to_dto(user)
