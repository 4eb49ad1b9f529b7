from apps.common.repository import GenericRepository
from .models import User


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)

    def create_user(self, **data) -> User:
        password = data.pop("password", None)
        user = self.model(**data)
        user.set_password(password)
        user.save()
        return user
