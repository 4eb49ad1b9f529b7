from dataclasses import dataclass
from typing import Optional

from .models import User


@dataclass
class UserDTO:
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    name: str
    phone: str
    location: str
    role: str
    is_privileged: bool
    date_joined: Optional[str]


def user_to_dto(u: User) -> UserDTO:
    joined = getattr(u, "date_joined", None)
    if joined is not None:
        try:
            joined = joined.isoformat()
        except AttributeError:
            joined = str(joined)
    return UserDTO(
        id=u.id,
        username=u.username,
        email=u.email,
        first_name=u.first_name,
        last_name=u.last_name,
        name=u.display_name,
        phone=u.phone,
        location=u.location,
        role=str(u.role),
        is_privileged=u.is_privileged,
        date_joined=joined,
    )
