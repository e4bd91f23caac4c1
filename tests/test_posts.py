"""Tests for post endpoints and post likes."""

import pytest
from httpx import AsyncClient

DENIED = {"detail": "permission denied"}


async def _publish(client: AsyncClient, user, content: str = "primer post") -> dict:
    res = await client.post(
        f"/api/users/{user.username}/posts/",
        json={"content": content, "media_url": "https://cdn.example.com/a.jpg"},
        headers=user.headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


@pytest.mark.asyncio
async def test_create_and_get_post(async_client: AsyncClient, register):
    me = await register("author")

    created = await _publish(async_client, me)

    assert created["user_id"] == me.id
    assert created["content"] == "primer post"
    assert created["edited_at"] is None

    res = await async_client.get(f"/api/posts/{created['id']}/")
    assert res.status_code == 200
    assert res.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_cannot_publish_on_someone_elses_feed(async_client: AsyncClient, register):
    me = await register("author")
    other = await register("other")

    res = await async_client.post(
        f"/api/users/{other.username}/posts/", json={"content": "hola"}, headers=me.headers
    )

    assert res.status_code == 401
    assert res.json() == DENIED


@pytest.mark.asyncio
async def test_list_user_posts_newest_first(async_client: AsyncClient, register):
    me = await register("author")
    first = await _publish(async_client, me, "uno")
    second = await _publish(async_client, me, "dos")

    res = await async_client.get(f"/api/users/{me.username}/posts/")

    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_list_posts_of_unknown_user(async_client: AsyncClient):
    res = await async_client.get("/api/users/ghost/posts/")

    assert res.status_code == 404


@pytest.mark.asyncio
async def test_feed_paginates(async_client: AsyncClient, register):
    me = await register("author")
    for i in range(3):
        await _publish(async_client, me, f"post {i}")

    page = await async_client.get("/api/posts/", params={"limit": 2, "offset": 0})
    rest = await async_client.get("/api/posts/", params={"limit": 2, "offset": 2})

    assert len(page.json()) == 2
    assert len(rest.json()) == 1


@pytest.mark.asyncio
async def test_get_missing_post(async_client: AsyncClient):
    res = await async_client.get("/api/posts/999/")

    assert res.status_code == 404


@pytest.mark.asyncio
async def test_owner_edits_post(async_client: AsyncClient, register):
    me = await register("author")
    post = await _publish(async_client, me)

    res = await async_client.patch(
        f"/api/posts/{post['id']}/", json={"content": "editado"}, headers=me.headers
    )

    assert res.status_code == 200
    body = res.json()
    assert body["content"] == "editado"
    assert body["media_url"] == post["media_url"]
    assert body["edited_at"] is not None


@pytest.mark.asyncio
async def test_non_owner_cannot_edit_or_delete(async_client: AsyncClient, register):
    me = await register("author")
    intruder = await register("intruder")
    post = await _publish(async_client, me)

    edit = await async_client.put(
        f"/api/posts/{post['id']}/", json={"content": "hackeado"}, headers=intruder.headers
    )
    delete = await async_client.delete(f"/api/posts/{post['id']}/", headers=intruder.headers)

    for res in (edit, delete):
        assert res.status_code == 401
        assert res.json() == DENIED
    assert (await async_client.get(f"/api/posts/{post['id']}/")).json()["content"] == "primer post"


@pytest.mark.asyncio
@pytest.mark.parametrize("post_id", ["999", "abc", "0", str(2**31), str(2**64)])
async def test_mutating_missing_post_is_denied_not_500(async_client: AsyncClient, register, post_id):
    me = await register("author")

    res = await async_client.delete(f"/api/posts/{post_id}/", headers=me.headers)

    assert res.status_code == 401
    assert res.json() == DENIED


@pytest.mark.asyncio
async def test_owner_deletes_post(async_client: AsyncClient, register):
    me = await register("author")
    post = await _publish(async_client, me)

    res = await async_client.delete(f"/api/posts/{post['id']}/", headers=me.headers)

    assert res.status_code == 200
    assert (await async_client.get(f"/api/posts/{post['id']}/")).status_code == 404


@pytest.mark.asyncio
async def test_like_and_unlike_post(async_client: AsyncClient, register):
    me = await register("author")
    fan = await register("fan")
    post = await _publish(async_client, me)
    url = f"/api/posts/{post['id']}"

    liked = await async_client.post(f"{url}/like/", headers=fan.headers)
    assert liked.status_code == 200
    assert liked.json() == {"id": post["id"], "count": 1, "users": [fan.username]}

    dup = await async_client.post(f"{url}/like/", headers=fan.headers)
    assert dup.status_code == 409

    likes = await async_client.get(f"{url}/likes/")
    assert likes.json()["users"] == [fan.username]

    unliked = await async_client.delete(f"{url}/unlike/", headers=fan.headers)
    assert unliked.status_code == 200
    assert unliked.json()["count"] == 0

    again = await async_client.delete(f"{url}/like/", headers=fan.headers)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_like_requires_login(async_client: AsyncClient, register):
    me = await register("author")
    post = await _publish(async_client, me)

    res = await async_client.post(f"/api/posts/{post['id']}/like/")

    assert res.status_code == 401
    assert res.json() == DENIED


@pytest.mark.asyncio
async def test_like_missing_post(async_client: AsyncClient, register):
    fan = await register("fan")

    res = await async_client.post("/api/posts/999/like/", headers=fan.headers)

    assert res.status_code == 404


@pytest.mark.asyncio
async def test_token_accepted_as_query_param(async_client: AsyncClient, register):
    me = await register("author")
    post = await _publish(async_client, me)

    res = await async_client.post(f"/api/posts/{post['id']}/like/", params={"token": me.token})

    assert res.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("post_id", ["0", str(2**31), str(2**64)])
async def test_out_of_range_post_id_is_rejected_before_the_db(
    async_client: AsyncClient, register, post_id
):
    fan = await register("fan")

    get = await async_client.get(f"/api/posts/{post_id}/")
    likes = await async_client.get(f"/api/posts/{post_id}/likes/")
    like = await async_client.post(f"/api/posts/{post_id}/like/", headers=fan.headers)
    comments = await async_client.get(f"/api/posts/{post_id}/comments/")

    for res in (get, likes, like, comments):
        assert res.status_code == 422
