"""Unit tests for the Resend mail adapter."""

import pytest
import resend

from baraza.domain.entities import Article, Category, Newsletter, NewsletterSection, User
from baraza.infrastructure.mail import ResendMailer


def _sections() -> list[NewsletterSection]:
    return [
        NewsletterSection(
            category=Category("Science", 2),
            articles=[Article(id=1, title="Stars & tides", content="C", summary="s" * 160)],
        ),
        NewsletterSection(
            category=Category("History", 1),
            articles=[
                Article(id=2, title="Dhows", content="C", cover_image_url="https://cdn.example/d.jpg")
            ],
        ),
    ]


def test_newsletter_body_lists_categories_in_order():
    mailer = ResendMailer(api_key="", from_email="n@baraza.test", public_base_url="https://baraza.test")

    html = mailer.render_newsletter(_sections())

    assert html.index("Science") < html.index("History")
    assert "Stars &amp; tides" in html
    assert "s" * 150 + "..." in html
    assert "https://baraza.test/assets/z_original.png" in html
    assert "https://cdn.example/d.jpg" in html


@pytest.mark.asyncio
async def test_without_api_key_messages_are_only_logged(monkeypatch):
    def fail(params):
        raise AssertionError("resend must not be called")

    monkeypatch.setattr(resend.Emails, "send", fail)
    mailer = ResendMailer(api_key="", from_email="n@baraza.test", public_base_url="https://baraza.test")

    assert await mailer.send_newsletter(Newsletter(id=1), _sections(), ["a@example.com"]) is True


@pytest.mark.asyncio
async def test_newsletter_is_sent_to_every_recipient(monkeypatch):
    sent: list[dict] = []
    monkeypatch.setattr(resend.Emails, "send", lambda params: sent.append(params) or {"id": "x"})
    mailer = ResendMailer(
        api_key="re_test",
        from_email="Baraza <n@baraza.test>",
        public_base_url="https://baraza.test",
    )

    ok = await mailer.send_newsletter(Newsletter(id=1), _sections(), ["a@example.com", "b@example.com"])

    assert ok is True
    assert sent[0]["to"] == ["a@example.com", "b@example.com"]
    assert sent[0]["subject"] == "Baraza newsletter"
    assert sent[0]["from"] == "Baraza <n@baraza.test>"


@pytest.mark.asyncio
async def test_provider_failure_returns_false(monkeypatch):
    def boom(params):
        raise RuntimeError("rate limited")

    monkeypatch.setattr(resend.Emails, "send", boom)
    mailer = ResendMailer(api_key="re_test", from_email="n@baraza.test", public_base_url="https://baraza.test")

    user = User(id=1, first_name="Amina", email="amina@example.com")
    assert await mailer.send_editor_welcome(user) is False
