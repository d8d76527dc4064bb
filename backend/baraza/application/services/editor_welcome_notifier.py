"""Sends the editor welcome mail when a user is promoted to editor."""

import logging

from baraza.application.interfaces import Mailer, UserRepository
from baraza.domain.entities import UserRole
from baraza.domain.events import UserRoleChanged

logger = logging.getLogger(__name__)


class EditorWelcomeNotifier:
    """Handler for ``UserRoleChanged`` events."""

    def __init__(self, mailer: Mailer, user_repository: UserRepository):
        self._mailer = mailer
        self._users = user_repository

    async def __call__(self, event: UserRoleChanged) -> None:
        if event.new_role != UserRole.EDITOR.value or event.user_id is None:
            return
        user = await self._users.get_by_id(event.user_id)
        if user is None:
            logger.warning("Editor welcome skipped: user %s no longer exists", event.user_id)
            return
        if not user.email:
            logger.info("Editor welcome skipped: user %s has no email address", user.id)
            return
        await self._mailer.send_editor_welcome(user)
