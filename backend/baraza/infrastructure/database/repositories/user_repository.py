"""Concrete user repository backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from baraza.application.interfaces import UserRepository
from baraza.domain.entities import GenderCategory, User, UserRole
from baraza.infrastructure.database.models import UserModel


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port. Roles and genders are stored by value."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            gender=GenderCategory(model.gender) if model.gender else None,
            role=UserRole(model.role),
            provider=model.provider,
            uid=model.uid,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_model(entity: User) -> UserModel:
        return UserModel(
            email=entity.email,
            password_hash=entity.password_hash,
            first_name=entity.first_name,
            last_name=entity.last_name,
            gender=entity.gender.value if entity.gender else None,
            role=entity.role.value,
            provider=entity.provider,
            uid=entity.uid,
        )

    async def get_by_id(self, user_id: int) -> User | None:
        model = await self._session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(select(UserModel).where(UserModel.email == email))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[User]:
        stmt = select(UserModel).offset(skip).limit(limit).order_by(UserModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, user: User) -> User:
        model = self._to_model(user)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, user: User) -> User:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            raise ValueError(f"User {user.id} not found in database")
        model.email = user.email
        model.password_hash = user.password_hash
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.gender = user.gender.value if user.gender else None
        model.role = user.role.value
        model.updated_at = user.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, user_id: int) -> bool:
        model = await self._session.get(UserModel, user_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
