"""Integration tests for the newsletter endpoints."""

import pytest


async def _create_category(client, headers, name="History") -> int:
    response = await client.post("/api/v1/categories", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


async def _create_article(client, headers, title) -> int:
    response = await client.post(
        "/api/v1/articles", json={"title": title, "content": "Body"}, headers=headers
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.mark.asyncio
async def test_approve_commit_updates_category_position_and_approves(client, admin):
    headers = {"X-User-Id": str(admin.id)}
    category_id = await _create_category(client, headers)
    created = await client.post(
        "/api/v1/newsletters", json={"category_ids": [category_id]}, headers=headers
    )
    newsletter = created.json()
    entry_id = newsletter["category_newsletters"][0]["id"]

    response = await client.patch(
        f"/api/v1/newsletters/{newsletter['id']}",
        json={
            "newsletter": {
                "category_newsletters_attributes": [
                    {
                        "position_in_newsletter": "100",
                        "category_id": category_id,
                        "newsletter_id": newsletter["id"],
                        "id": entry_id,
                    }
                ],
                "articles_attributes": [],
            },
            "commit": "Approve",
        },
        headers=headers,
    )

    assert response.status_code == 200
    stored = (await client.get(f"/api/v1/newsletters/{newsletter['id']}", headers=headers)).json()
    assert stored["status"] == "approved"
    assert stored["category_newsletters"][0]["position_in_newsletter"] == 100


@pytest.mark.asyncio
async def test_positions_for_articles_outside_article_ids_are_dropped(client, admin):
    headers = {"X-User-Id": str(admin.id)}
    category_id = await _create_category(client, headers)
    a1, a2, a3 = [await _create_article(client, headers, f"Article {n}") for n in (1, 2, 3)]
    created = await client.post(
        "/api/v1/newsletters",
        json={"category_ids": [category_id], "article_ids": [a1, a2, a3]},
        headers=headers,
    )
    newsletter_id = created.json()["id"]

    response = await client.patch(
        f"/api/v1/newsletters/{newsletter_id}",
        json={
            "newsletter": {
                "article_ids": [a1],
                "articles_attributes": [
                    {"position_in_newsletter": "1", "id": a1},
                    {"position_in_newsletter": "2", "id": a2},
                    {"position_in_newsletter": "3", "id": a3},
                ],
            },
            "commit": "Approve",
        },
        headers=headers,
    )

    assert response.status_code == 200
    stored = (await client.get(f"/api/v1/newsletters/{newsletter_id}", headers=headers)).json()
    assert [a["article_id"] for a in stored["articles"]] == [a1]


@pytest.mark.asyncio
async def test_terminal_newsletter_cannot_be_approved_again(client, editor):
    headers = {"X-User-Id": str(editor.id)}
    newsletter_id = (await client.post("/api/v1/newsletters", json={}, headers=headers)).json()["id"]

    rejected = await client.post(f"/api/v1/newsletters/{newsletter_id}/reject", headers=headers)
    assert rejected.json()["status"] == "rejected"

    response = await client.patch(
        f"/api/v1/newsletters/{newsletter_id}", json={"commit": "Approve"}, headers=headers
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_newsletters_require_editor_role(client, author):
    assert (await client.get("/api/v1/newsletters")).status_code == 403
    response = await client.post(
        "/api/v1/newsletters", json={}, headers={"X-User-Id": str(author.id)}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unknown_article_in_create_is_unprocessable(client, editor):
    response = await client.post(
        "/api/v1/newsletters", json={"article_ids": [999]}, headers={"X-User-Id": str(editor.id)}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_send_approved_newsletter_to_subscribers(client, admin, mailer):
    headers = {"X-User-Id": str(admin.id)}
    category_id = await _create_category(client, headers)
    article_id = await _create_article(client, headers, "Dhows")
    await client.post("/api/v1/subscribers", json={"email": "reader@example.com"})
    newsletter_id = (
        await client.post(
            "/api/v1/newsletters",
            json={"category_ids": [category_id], "article_ids": [article_id]},
            headers=headers,
        )
    ).json()["id"]

    draft_send = await client.post(f"/api/v1/newsletters/{newsletter_id}/send", headers=headers)
    assert draft_send.status_code == 409

    await client.put(
        f"/api/v1/newsletters/{newsletter_id}/categories/{category_id}/articles",
        json={"article_ids": [article_id]},
        headers=headers,
    )
    await client.patch(f"/api/v1/newsletters/{newsletter_id}", json={"commit": "Approve"}, headers=headers)
    response = await client.post(f"/api/v1/newsletters/{newsletter_id}/send", headers=headers)

    assert response.json() == {"newsletter_id": newsletter_id, "recipients": 1, "sent": True}
    _, sections, recipients = mailer.newsletters[0]
    assert recipients == ["reader@example.com"]
    assert [a.title for a in sections[0].articles] == ["Dhows"]
    stored = (await client.get(f"/api/v1/newsletters/{newsletter_id}", headers=headers)).json()
    assert stored["sent_at"] is not None


@pytest.mark.asyncio
async def test_failed_submission_leaves_stored_newsletter_unchanged(client, editor):
    headers = {"X-User-Id": str(editor.id)}
    category_id = await _create_category(client, headers)
    in_pool = await _create_article(client, headers, "In pool")
    outside_pool = await _create_article(client, headers, "Outside pool")
    newsletter_id = (
        await client.post(
            "/api/v1/newsletters",
            json={"category_ids": [category_id], "article_ids": [in_pool]},
            headers=headers,
        )
    ).json()["id"]

    response = await client.patch(
        f"/api/v1/newsletters/{newsletter_id}",
        json={
            "newsletter": {
                "category_newsletters_attributes": [
                    {"category_id": category_id, "position_in_newsletter": "7"}
                ],
                "article_ids": [str(in_pool), str(outside_pool)],
            },
            "commit": "Approve",
        },
        headers=headers,
    )

    assert response.status_code == 422
    stored = (await client.get(f"/api/v1/newsletters/{newsletter_id}", headers=headers)).json()
    assert stored["status"] == "draft"
    assert stored["category_newsletters"][0]["position_in_newsletter"] is None
    assert [a["article_id"] for a in stored["articles"]] == [in_pool]


@pytest.mark.asyncio
async def test_duplicate_category_entries_store_the_last_position(client, editor):
    headers = {"X-User-Id": str(editor.id)}
    category_id = await _create_category(client, headers)
    newsletter_id = (
        await client.post("/api/v1/newsletters", json={"category_ids": [category_id]}, headers=headers)
    ).json()["id"]

    response = await client.patch(
        f"/api/v1/newsletters/{newsletter_id}",
        json={
            "newsletter": {
                "category_newsletters_attributes": [
                    {"category_id": category_id, "position_in_newsletter": 1},
                    {"category_id": category_id, "position_in_newsletter": 5},
                ]
            },
            "commit": "Save",
        },
        headers=headers,
    )

    assert response.status_code == 200
    entries = response.json()["category_newsletters"]
    assert [(e["category_id"], e["position_in_newsletter"]) for e in entries] == [(category_id, 5)]


@pytest.mark.asyncio
async def test_resubmitting_the_same_form_is_idempotent(client, editor):
    headers = {"X-User-Id": str(editor.id)}
    history = await _create_category(client, headers, "History")
    science = await _create_category(client, headers, "Science")
    a1, a2 = [await _create_article(client, headers, f"Article {n}") for n in (1, 2)]
    newsletter_id = (
        await client.post(
            "/api/v1/newsletters",
            json={"category_ids": [history, science], "article_ids": [a1, a2]},
            headers=headers,
        )
    ).json()["id"]
    body = {
        "newsletter": {
            "category_newsletters_attributes": [
                {"category_id": science, "position_in_newsletter": "1"},
                {"category_id": history, "position_in_newsletter": "2"},
            ],
            "article_ids": ["", str(a2), str(a1)],
            "articles_attributes": [
                {"id": a2, "position_in_newsletter": "1"},
                {"id": a1, "position_in_newsletter": "2"},
            ],
        },
        "commit": "Save",
    }

    first = await client.patch(f"/api/v1/newsletters/{newsletter_id}", json=body, headers=headers)
    second = await client.patch(f"/api/v1/newsletters/{newsletter_id}", json=body, headers=headers)

    assert first.status_code == second.status_code == 200
    for key in ("category_newsletters", "articles", "status"):
        assert second.json()[key] == first.json()[key]
