from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Port for the transaction shared by the repositories of one request."""

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
