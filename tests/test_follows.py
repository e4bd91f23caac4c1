"""Tests for follow/unfollow endpoints."""

import pytest
from httpx import AsyncClient

DENIED = {"detail": "permission denied"}


@pytest.mark.asyncio
async def test_follow_and_list(async_client: AsyncClient, register):
    me = await register("me")
    star = await register("star")

    res = await async_client.post(f"/api/users/{star.username}/follow/", headers=me.headers)

    assert res.status_code == 200
    assert res.json() == {"username": star.username, "follower": me.username, "following": True}
    followers = await async_client.get(f"/api/users/{star.username}/followers/")
    following = await async_client.get(f"/api/users/{me.username}/following/")
    assert followers.json() == [me.username]
    assert following.json() == [star.username]


@pytest.mark.asyncio
async def test_follow_twice_conflicts(async_client: AsyncClient, register):
    me = await register("me")
    star = await register("star")
    await async_client.post(f"/api/users/{star.username}/follow/", headers=me.headers)

    res = await async_client.post(f"/api/users/{star.username}/follow/", headers=me.headers)

    assert res.status_code == 409


@pytest.mark.asyncio
async def test_cannot_follow_yourself(async_client: AsyncClient, register):
    me = await register("me")

    res = await async_client.post(f"/api/users/{me.username}/follow/", headers=me.headers)

    assert res.status_code == 400


@pytest.mark.asyncio
async def test_follow_unknown_user(async_client: AsyncClient, register):
    me = await register("me")

    res = await async_client.post("/api/users/ghost/follow/", headers=me.headers)

    assert res.status_code == 404


@pytest.mark.asyncio
async def test_follow_requires_login(async_client: AsyncClient, register):
    star = await register("star")

    res = await async_client.post(f"/api/users/{star.username}/follow/")

    assert res.status_code == 401
    assert res.json() == DENIED


@pytest.mark.asyncio
async def test_unfollow(async_client: AsyncClient, register):
    me = await register("me")
    star = await register("star")
    await async_client.post(f"/api/users/{star.username}/follow/", headers=me.headers)

    res = await async_client.delete(f"/api/users/{star.username}/unfollow/", headers=me.headers)

    assert res.status_code == 200
    assert res.json()["following"] is False
    assert (await async_client.get(f"/api/users/{star.username}/followers/")).json() == []

    again = await async_client.delete(f"/api/users/{star.username}/follow/", headers=me.headers)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_followers_of_unknown_user(async_client: AsyncClient):
    assert (await async_client.get("/api/users/ghost/followers/")).status_code == 404
    assert (await async_client.get("/api/users/ghost/following/")).status_code == 404
