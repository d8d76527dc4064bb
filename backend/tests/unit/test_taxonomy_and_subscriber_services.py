"""Unit tests for the tag/category vocabulary and newsletter subscriptions."""

import pytest

from baraza.application.schemas import CategoryCreate, SubscriberCreate
from baraza.application.services import SubscriberService, TaxonomyService
from baraza.domain.exceptions import DuplicateEntityError, EntityNotFoundError


@pytest.fixture
def taxonomy(tag_repository, category_repository, unit_of_work) -> TaxonomyService:
    return TaxonomyService(tag_repository, category_repository, unit_of_work)


@pytest.fixture
def subscriptions(subscriber_repository, unit_of_work) -> SubscriberService:
    return SubscriberService(subscriber_repository, unit_of_work)


@pytest.mark.asyncio
async def test_create_category_rejects_duplicate_names(taxonomy):
    created = await taxonomy.create_category(CategoryCreate(name=" History "))
    assert created.name == "History"
    with pytest.raises(DuplicateEntityError):
        await taxonomy.create_category(CategoryCreate(name="History"))
    assert [c.name for c in await taxonomy.list_categories()] == ["History"]


@pytest.mark.asyncio
async def test_subscribe_is_idempotent(subscriptions):
    first = await subscriptions.subscribe(SubscriberCreate(email="Reader@Example.com"))
    again = await subscriptions.subscribe(SubscriberCreate(email="reader@example.com"))
    assert first.id == again.id
    assert await subscriptions.recipient_addresses() == ["reader@example.com"]


@pytest.mark.asyncio
async def test_unsubscribe_unknown_address(subscriptions):
    with pytest.raises(EntityNotFoundError):
        await subscriptions.unsubscribe("nobody@example.com")
