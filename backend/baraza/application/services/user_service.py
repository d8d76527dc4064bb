"""Application service (use case) for user administration."""

from baraza.application.interfaces import PasswordHasher, UnitOfWork, UserRepository
from baraza.application.schemas import EmailChange, UserCreate, UserUpdate
from baraza.application.services.event_dispatcher import EventDispatcher
from baraza.domain.entities import User, validate_credentials
from baraza.domain.exceptions import DuplicateEntityError, EntityNotFoundError, ValidationError


class UserService:
    """Orchestrates user CRUD and role changes.

    Role-change events are published only after the change is committed.
    """

    def __init__(
        self,
        repository: UserRepository,
        unit_of_work: UnitOfWork,
        password_hasher: PasswordHasher,
        events: EventDispatcher,
    ):
        self._repository = repository
        self._uow = unit_of_work
        self._hasher = password_hasher
        self._events = events

    async def get_user(self, user_id: int) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[User]:
        return await self._repository.get_all(skip=skip, limit=limit)

    async def create_user(self, data: UserCreate) -> User:
        provider_linked = bool(data.provider and data.uid)
        errors = validate_credentials(
            data.email,
            data.password,
            data.password_confirmation,
            provider_linked=provider_linked,
        )
        if errors:
            raise ValidationError(errors)

        email = data.email.strip().lower() if data.email else None
        if email and await self._repository.get_by_email(email) is not None:
            raise DuplicateEntityError("User", "email", email)

        user = User(
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            gender=data.gender,
            role=data.role,
            provider=data.provider,
            uid=data.uid,
            password_hash=self._hasher.hash(data.password) if data.password else None,
        )
        user = await self._repository.create(user)
        await self._uow.commit()
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        user.update(first_name=data.first_name, last_name=data.last_name, gender=data.gender)
        event = user.change_role(data.role) if data.role is not None else None

        user = await self._repository.update(user)
        await self._uow.commit()
        if event is not None:
            await self._events.publish(event)
        return user

    async def change_email(self, user_id: int, data: EmailChange) -> User:
        user = await self.get_user(user_id)
        email = data.email.strip().lower()
        other = await self._repository.get_by_email(email)
        if other is not None and other.id != user.id:
            raise DuplicateEntityError("User", "email", email)
        user.change_email(email)
        user = await self._repository.update(user)
        await self._uow.commit()
        return user

    async def delete_user(self, user_id: int) -> bool:
        exists = await self._repository.get_by_id(user_id)
        if exists is None:
            raise EntityNotFoundError("User", user_id)
        deleted = await self._repository.delete(user_id)
        await self._uow.commit()
        return deleted
