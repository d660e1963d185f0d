from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.objects import User
from app.mappers.entity_mapper import user_mapper
from app.repositories.user_repository import UserRepository
from .crud_service import CrudOperations, CrudService


class UserService(CrudOperations[User]):

    def __init__(self, db: AsyncSession):
        self.repository = UserRepository(db)
        self.crud = CrudService(self.repository, user_mapper, "User")

    async def get_by_login_name(self, login_name: str) -> User:
        return await self.crud.get_by_field("login_name", login_name)
