"""Tests for reaction endpoints."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient


async def create_thought(async_client: AsyncClient) -> dict[str, Any]:
    response = await async_client.post(
        "/api/thoughts",
        json={"thoughtText": "react to me", "username": "poster"},
    )
    assert response.status_code == 201
    return response.json()


async def add_reaction(
    async_client: AsyncClient,
    thought_id: str,
    body: str = "nice",
    username: str = "bob",
) -> dict[str, Any]:
    response = await async_client.post(
        f"/api/thoughts/{thought_id}/reactions",
        json={"reactionBody": body, "username": username},
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_add_reaction_increments_count(async_client: AsyncClient):
    thought = await create_thought(async_client)

    updated = await add_reaction(async_client, thought["id"])
    assert updated["id"] == thought["id"]
    assert updated["reactionCount"] == 1
    reaction = updated["reactions"][0]
    assert reaction["reactionBody"] == "nice"
    assert reaction["username"] == "bob"
    assert reaction["id"]
    assert reaction["createdAt"]

    fetched = (await async_client.get(f"/api/thoughts/{thought['id']}")).json()
    assert fetched["reactionCount"] == thought["reactionCount"] + 1


@pytest.mark.asyncio
async def test_reactions_keep_insertion_order(async_client: AsyncClient):
    thought = await create_thought(async_client)

    for body in ("first", "second", "third"):
        await add_reaction(async_client, thought["id"], body=body)

    fetched = (await async_client.get(f"/api/thoughts/{thought['id']}")).json()
    assert [item["reactionBody"] for item in fetched["reactions"]] == ["first", "second", "third"]
    assert len({item["id"] for item in fetched["reactions"]}) == 3


@pytest.mark.asyncio
async def test_remove_reaction_decrements_count(async_client: AsyncClient):
    thought = await create_thought(async_client)
    await add_reaction(async_client, thought["id"], body="keep")
    updated = await add_reaction(async_client, thought["id"], body="drop")
    drop_id = updated["reactions"][1]["id"]

    response = await async_client.delete(f"/api/thoughts/{thought['id']}/reactions/{drop_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Reaction deleted successfully"}

    fetched = (await async_client.get(f"/api/thoughts/{thought['id']}")).json()
    assert fetched["reactionCount"] == 1
    assert [item["reactionBody"] for item in fetched["reactions"]] == ["keep"]
    assert drop_id not in {item["id"] for item in fetched["reactions"]}


@pytest.mark.asyncio
async def test_remove_unknown_reaction_leaves_reactions_unchanged(async_client: AsyncClient):
    thought = await create_thought(async_client)
    before = await add_reaction(async_client, thought["id"])

    response = await async_client.delete(f"/api/thoughts/{thought['id']}/reactions/{uuid4()}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Reaction not found"

    after = (await async_client.get(f"/api/thoughts/{thought['id']}")).json()
    assert after["reactions"] == before["reactions"]


@pytest.mark.asyncio
async def test_reaction_routes_404_for_unknown_thought(async_client: AsyncClient):
    missing_id = uuid4()

    add_resp = await async_client.post(
        f"/api/thoughts/{missing_id}/reactions",
        json={"reactionBody": "hello", "username": "bob"},
    )
    assert add_resp.status_code == 404
    assert add_resp.json()["detail"] == "Thought not found"

    remove_resp = await async_client.delete(f"/api/thoughts/{missing_id}/reactions/{uuid4()}")
    assert remove_resp.status_code == 404
    assert remove_resp.json()["detail"] == "Thought not found"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"username": "bob"}, "reactionBody"),
        ({"reactionBody": "r" * 281, "username": "bob"}, "reactionBody"),
        ({"reactionBody": "ok"}, "username"),
    ],
)
async def test_add_reaction_rejects_invalid_fields(
    async_client: AsyncClient,
    payload: dict[str, str],
    field: str,
):
    thought = await create_thought(async_client)

    response = await async_client.post(f"/api/thoughts/{thought['id']}/reactions", json=payload)
    assert response.status_code == 400
    assert field in response.json()["errors"]

    fetched = (await async_client.get(f"/api/thoughts/{thought['id']}")).json()
    assert fetched["reactionCount"] == 0


@pytest.mark.asyncio
async def test_reaction_ids_are_scoped_to_their_thought(async_client: AsyncClient):
    first = await create_thought(async_client)
    second = await create_thought(async_client)
    with_reaction = await add_reaction(async_client, first["id"])
    reaction_id = with_reaction["reactions"][0]["id"]

    response = await async_client.delete(f"/api/thoughts/{second['id']}/reactions/{reaction_id}")
    assert response.status_code == 404

    fetched = (await async_client.get(f"/api/thoughts/{first['id']}")).json()
    assert fetched["reactionCount"] == 1
