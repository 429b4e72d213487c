import uuid

import pytest
from sqlalchemy.future import select

from conftest import auth_header
from models.like import Like
from models.tweet import Tweet


@pytest.mark.asyncio
async def test_create_tweet_then_list_user_tweets(api_client, users):
    client, _ = api_client
    created = await client.post("/tweets", json={"content": "hello"}, headers=auth_header(users["alice"]))
    assert created.status_code == 200
    assert created.json()["message"] == "Tweet created successfully"
    assert created.json()["data"]["content"] == "hello"

    listing = await client.get(f"/tweets/user/{users['alice']}", headers=auth_header(users["bob"]))
    assert listing.status_code == 200
    tweets = listing.json()["data"]
    assert len(tweets) == 1
    assert tweets[0]["content"] == "hello"
    assert tweets[0]["owner"] == {
        "id": users["alice"],
        "username": "alice",
        "fullname": "Alice",
        "avatar": "https://cdn.test/avatars/alice.png",
    }


@pytest.mark.asyncio
async def test_user_tweets_newest_first_with_like_counts(api_client, users):
    client, _ = api_client
    alice = auth_header(users["alice"])
    first = (await client.post("/tweets", json={"content": "first"}, headers=alice)).json()["data"]
    await client.post("/tweets", json={"content": "second"}, headers=alice)
    await client.post(f"/likes/toggle/t/{first['id']}", headers=auth_header(users["bob"]))

    tweets = (await client.get(f"/tweets/user/{users['alice']}", headers=alice)).json()["data"]
    assert [(t["content"], t["likes"]) for t in tweets] == [("second", 0), ("first", 1)]

    nobody = await client.get(f"/tweets/user/{uuid.uuid4()}", headers=alice)
    assert nobody.status_code == 200
    assert nobody.json()["data"] == []


@pytest.mark.asyncio
async def test_tweet_validation(api_client, users):
    client, _ = api_client
    alice = auth_header(users["alice"])

    empty = await client.post("/tweets", json={}, headers=alice)
    assert empty.status_code == 400
    assert empty.json()["message"] == "Tweet is required"

    bad_user = await client.get("/tweets/user/42", headers=alice)
    assert bad_user.status_code == 400
    assert bad_user.json()["message"] == "provide valid user id"


@pytest.mark.asyncio
async def test_update_and_delete_tweet_owner_only(api_client, users):
    client, session_maker = api_client
    tweet = (await client.post("/tweets", json={"content": "mine"}, headers=auth_header(users["alice"]))).json()["data"]
    bob = auth_header(users["bob"])

    assert (await client.patch(f"/tweets/{tweet['id']}", json={"content": "yours"}, headers=bob)).status_code == 401
    assert (await client.delete(f"/tweets/{tweet['id']}", headers=bob)).status_code == 401
    async with session_maker() as session:
        stored = await session.get(Tweet, tweet["id"])
    assert stored.content == "mine"

    updated = await client.patch(
        f"/tweets/{tweet['id']}",
        json={"content": "still mine"},
        headers=auth_header(users["alice"]),
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["content"] == "still mine"

    blank = await client.patch(f"/tweets/{tweet['id']}", json={"content": " "}, headers=auth_header(users["alice"]))
    assert blank.status_code == 400


@pytest.mark.asyncio
async def test_delete_tweet_removes_likes(api_client, users):
    client, session_maker = api_client
    alice = auth_header(users["alice"])
    tweet = (await client.post("/tweets", json={"content": "short lived"}, headers=alice)).json()["data"]
    await client.post(f"/likes/toggle/t/{tweet['id']}", headers=auth_header(users["bob"]))

    response = await client.delete(f"/tweets/{tweet['id']}", headers=alice)
    assert response.status_code == 200
    assert response.json()["message"] == "deleted tweet successfully"

    async with session_maker() as session:
        assert (await session.execute(select(Like))).scalars().all() == []
        assert await session.get(Tweet, tweet["id"]) is None

    missing = await client.delete(f"/tweets/{tweet['id']}", headers=alice)
    assert missing.status_code == 404
