"""Resend mail adapter — implements the Mailer interface."""

import asyncio
import logging
from html import escape

import resend

from baraza.application.formatting import cover_image_url_for, truncate_summary
from baraza.application.interfaces import Mailer
from baraza.domain.entities import Newsletter, NewsletterSection, User

logger = logging.getLogger(__name__)


class ResendMailer(Mailer):
    """Sends newsletter and account mail through the Resend API.

    Without an API key, messages are logged instead of sent and every send
    reports success.
    """

    def __init__(
        self,
        api_key: str,
        from_email: str,
        public_base_url: str,
        newsletter_subject: str = "Baraza newsletter",
    ):
        self._api_key = api_key
        if api_key:
            resend.api_key = api_key
        self._from_email = from_email
        self._base_url = public_base_url.rstrip("/")
        self._newsletter_subject = newsletter_subject

    async def send_newsletter(
        self,
        newsletter: Newsletter,
        sections: list[NewsletterSection],
        recipients: list[str],
    ) -> bool:
        return await self._send(
            to=recipients,
            subject=self._newsletter_subject,
            html=self.render_newsletter(sections),
            label=f"newsletter {newsletter.id}",
        )

    async def send_editor_welcome(self, user: User) -> bool:
        if not user.email:
            return False
        return await self._send(
            to=[user.email],
            subject="You are now a Baraza editor",
            html=self._get_editor_welcome_html(user),
            label=f"editor welcome for user {user.id}",
        )

    async def _send(self, *, to: list[str], subject: str, html: str, label: str) -> bool:
        if not self._api_key:
            logger.info("[DEV] %s to %d recipient(s): %s", label, len(to), subject)
            return True

        try:
            await asyncio.to_thread(
                resend.Emails.send,
                {"from": self._from_email, "to": to, "subject": subject, "html": html},
            )
        except Exception as exc:
            logger.error("Failed to send %s: %s", label, exc)
            return False
        logger.info("Sent %s to %d recipient(s)", label, len(to))
        return True

    # ── Templates ───────────────────────────────────────────────────

    def render_newsletter(self, sections: list[NewsletterSection]) -> str:
        """HTML body listing each category, in order, with its articles."""
        blocks = []
        for section in sections:
            items = "".join(
                f"""
                <tr>
                    <td style="padding: 12px 0;">
                        <img src="{escape(cover_image_url_for(article, self._base_url))}"
                             alt="" width="120" style="display: block; margin-bottom: 8px;">
                        <h3 style="margin: 0 0 4px; font-size: 18px;">{escape(article.title)}</h3>
                        <p style="margin: 0; color: #555;">{escape(truncate_summary(article.summary))}</p>
                    </td>
                </tr>"""
                for article in section.articles
            )
            blocks.append(
                f"""
            <h2 style="border-bottom: 1px solid #ddd; padding-bottom: 4px;">{escape(section.category.name)}</h2>
            <table width="100%" cellpadding="0" cellspacing="0">{items}
            </table>"""
            )

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <title>{escape(self._newsletter_subject)}</title>
        </head>
        <body style="font-family: Arial, sans-serif; max-width: 640px; margin: 0 auto;">
            <h1>{escape(self._newsletter_subject)}</h1>{"".join(blocks)}
            <p style="font-size: 12px; color: #999;">
                <a href="{self._base_url}/subscribers">Manage your subscription</a>
            </p>
        </body>
        </html>
        """

    def _get_editor_welcome_html(self, user: User) -> str:
        name = escape(user.full_name or user.email or "")
        return f"""
        <!DOCTYPE html>
        <html>
        <body style="font-family: Arial, sans-serif;">
            <h1>Welcome to the editorial team, {name}!</h1>
            <p>You can now curate and approve newsletters.</p>
            <p><a href="{self._base_url}/newsletters">Open the newsletter desk</a></p>
        </body>
        </html>
        """
