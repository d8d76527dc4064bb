"""Outbound mail port."""

from abc import ABC, abstractmethod

from baraza.domain.entities import Newsletter, NewsletterSection, User


class Mailer(ABC):
    """Port for transactional and newsletter mail."""

    @abstractmethod
    async def send_newsletter(
        self,
        newsletter: Newsletter,
        sections: list[NewsletterSection],
        recipients: list[str],
    ) -> bool:
        """Dispatch one newsletter message to all ``recipients``. Returns True on success."""
        ...

    @abstractmethod
    async def send_editor_welcome(self, user: User) -> bool:
        """Welcome a user who has just been given the editor role."""
        ...
