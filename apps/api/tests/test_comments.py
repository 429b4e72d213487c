import uuid

import pytest
from sqlalchemy.future import select

from conftest import auth_header, publish_video
from models.comment import Comment
from models.like import Like


@pytest.mark.asyncio
async def test_add_and_list_comments_with_owner_and_like_count(api_client, users):
    client, _ = api_client
    video = await publish_video(client, users["alice"])
    bob = auth_header(users["bob"])
    carol = auth_header(users["carol"])

    created = await client.post(f"/comments/{video['id']}", json={"content": "  great video  "}, headers=bob)
    assert created.status_code == 200
    comment = created.json()["data"]
    assert comment["content"] == "great video"
    assert comment["owner_id"] == users["bob"]
    assert created.json()["message"] == "Comment added successfully"

    await client.post(f"/comments/{video['id']}", json={"content": "second"}, headers=carol)
    await client.post(f"/likes/toggle/c/{comment['id']}", headers=carol)

    listing = await client.get(f"/comments/{video['id']}", headers=bob)
    assert listing.status_code == 200
    items = listing.json()["data"]
    assert [item["content"] for item in items] == ["great video", "second"]
    assert items[0]["likes"] == 1
    assert items[1]["likes"] == 0
    assert items[0]["owner"]["username"] == "bob"


@pytest.mark.asyncio
async def test_list_comments_paginates(api_client, users):
    client, _ = api_client
    video = await publish_video(client, users["alice"])
    bob = auth_header(users["bob"])
    for idx in range(5):
        await client.post(f"/comments/{video['id']}", json={"content": f"c{idx}"}, headers=bob)

    page_two = await client.get(f"/comments/{video['id']}?page=2&limit=2", headers=bob)
    assert [item["content"] for item in page_two.json()["data"]] == ["c2", "c3"]

    beyond = await client.get(f"/comments/{video['id']}?page=4&limit=2", headers=bob)
    assert beyond.json()["data"] == []


@pytest.mark.asyncio
async def test_add_comment_validation(api_client, users):
    client, _ = api_client
    video = await publish_video(client, users["alice"])
    bob = auth_header(users["bob"])

    blank = await client.post(f"/comments/{video['id']}", json={"content": "   "}, headers=bob)
    assert blank.status_code == 400
    assert blank.json()["message"] == "content is required"

    bad_video = await client.post("/comments/not-an-id", json={"content": "hi"}, headers=bob)
    assert bad_video.status_code == 400

    missing_video = await client.post(f"/comments/{uuid.uuid4()}", json={"content": "hi"}, headers=bob)
    assert missing_video.status_code == 404


@pytest.mark.asyncio
async def test_update_comment_owner_only(api_client, users):
    client, session_maker = api_client
    video = await publish_video(client, users["alice"])
    comment = (
        await client.post(f"/comments/{video['id']}", json={"content": "original"}, headers=auth_header(users["bob"]))
    ).json()["data"]

    forbidden = await client.patch(
        f"/comments/c/{comment['id']}",
        json={"content": "edited by carol"},
        headers=auth_header(users["carol"]),
    )
    assert forbidden.status_code == 401
    async with session_maker() as session:
        stored = await session.get(Comment, comment["id"])
    assert stored.content == "original"

    allowed = await client.patch(
        f"/comments/c/{comment['id']}",
        json={"content": "edited"},
        headers=auth_header(users["bob"]),
    )
    assert allowed.status_code == 200
    assert allowed.json()["data"]["content"] == "edited"


@pytest.mark.asyncio
async def test_update_missing_comment_is_not_found(api_client, users):
    client, _ = api_client
    response = await client.patch(
        f"/comments/c/{uuid.uuid4()}",
        json={"content": "edited"},
        headers=auth_header(users["bob"]),
    )
    assert response.status_code == 404
    assert response.json()["message"] == "comment not found"


@pytest.mark.asyncio
async def test_delete_comment_removes_its_likes(api_client, users):
    client, session_maker = api_client
    video = await publish_video(client, users["alice"])
    bob = auth_header(users["bob"])
    doomed = (await client.post(f"/comments/{video['id']}", json={"content": "bye"}, headers=bob)).json()["data"]
    kept = (await client.post(f"/comments/{video['id']}", json={"content": "stay"}, headers=bob)).json()["data"]
    for name in ("alice", "carol"):
        await client.post(f"/likes/toggle/c/{doomed['id']}", headers=auth_header(users[name]))
    await client.post(f"/likes/toggle/c/{kept['id']}", headers=auth_header(users["carol"]))

    not_owner = await client.delete(f"/comments/c/{doomed['id']}", headers=auth_header(users["carol"]))
    assert not_owner.status_code == 401

    response = await client.delete(f"/comments/c/{doomed['id']}", headers=bob)
    assert response.status_code == 200
    assert response.json()["data"] == {}

    async with session_maker() as session:
        likes = (await session.execute(select(Like))).scalars().all()
        assert await session.get(Comment, doomed["id"]) is None
    assert [(like.target_type, like.target_id) for like in likes] == [("comment", kept["id"])]
