"""End-to-end tests for the blog endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from blog_api.repositories import BlogRepository
from tests.conftest import Register, RegisteredUser

BLOGS = "/api/blogs"


def words(count: int) -> str:
    return " ".join(["word"] * count)


async def create_blog(
    client: AsyncClient,
    user: RegisteredUser,
    title: str = "A",
    body: str = "Some body text",
    **extra: object,
) -> dict:
    response = await client.post(
        BLOGS,
        json={"title": title, "body": body, **extra},
        headers=user.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def publish(client: AsyncClient, user: RegisteredUser, blog_id: str) -> dict:
    response = await client.patch(
        f"{BLOGS}/{blog_id}/state",
        json={"state": "published"},
        headers=user.headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


async def create_published(
    client: AsyncClient,
    user: RegisteredUser,
    title: str,
    **extra: object,
) -> dict:
    blog = await create_blog(client, user, title=title, **extra)
    return await publish(client, user, blog["id"])


class TestCreateBlog:
    @pytest.mark.asyncio
    async def test_created_as_draft(self, client: AsyncClient, author: RegisteredUser) -> None:
        blog = await create_blog(client, author, title="A", body=words(400))

        assert blog["state"] == "draft"
        assert blog["readCount"] == 0
        assert blog["readingTime"] == 2
        assert blog["authorId"] == author.id
        assert blog["createdAt"]

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient) -> None:
        response = await client.post(BLOGS, json={"title": "A", "body": "x"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Not authorized to access this route"}

    @pytest.mark.asyncio
    async def test_tags_normalized(self, client: AsyncClient, author: RegisteredUser) -> None:
        blog = await create_blog(client, author, tags=[" python ", "python", "", "web"])

        assert blog["tags"] == ["python", "web"]

    @pytest.mark.asyncio
    async def test_blank_title_is_structured_error(
        self,
        client: AsyncClient,
        author: RegisteredUser,
    ) -> None:
        response = await client.post(
            BLOGS,
            json={"title": "   ", "body": "x"},
            headers=author.headers,
        )

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Validation failed",
            "errors": [{"field": "title", "message": "Title is required", "type": "missing"}],
        }

    @pytest.mark.asyncio
    async def test_missing_body(self, client: AsyncClient, author: RegisteredUser) -> None:
        response = await client.post(BLOGS, json={"title": "A"}, headers=author.headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "body"

    @pytest.mark.asyncio
    async def test_title_taken_concurrently_is_conflict(
        self,
        client: AsyncClient,
        author: RegisteredUser,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        await create_blog(client, author, title="Raced")

        async def never_exists(*args: object, **kwargs: object) -> bool:
            return False

        monkeypatch.setattr(BlogRepository, "title_exists", never_exists)

        response = await client.post(
            BLOGS,
            json={"title": "Raced", "body": "x"},
            headers=author.headers,
        )

        assert response.status_code == 409
        assert response.json() == {"detail": "Blog already exists"}
        listing = await client.get(f"{BLOGS}/user/me", headers=author.headers)
        assert listing.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_duplicate_title(self, client: AsyncClient, author: RegisteredUser) -> None:
        await create_blog(client, author, title="Unique")

        response = await client.post(
            BLOGS,
            json={"title": "Unique", "body": "x"},
            headers=author.headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["type"] == "duplicate"


class TestGetBlog:
    @pytest.mark.asyncio
    async def test_published_readable_by_anyone_and_counted(
        self,
        client: AsyncClient,
        author: RegisteredUser,
    ) -> None:
        blog = await create_published(client, author, "Public")

        for expected in (1, 2, 3):
            response = await client.get(f"{BLOGS}/{blog['id']}")
            assert response.status_code == 200
            assert response.json()["readCount"] == expected

    @pytest.mark.asyncio
    async def test_author_embedded_without_secrets(
        self,
        client: AsyncClient,
        author: RegisteredUser,
    ) -> None:
        blog = await create_published(client, author, "Public")

        response = await client.get(f"{BLOGS}/{blog['id']}")

        assert response.json()["author"] == {
            "id": author.id,
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
        }
        assert "hash" not in response.text.lower()

    @pytest.mark.asyncio
    async def test_invalid_token_treated_as_anonymous(
        self,
        client: AsyncClient,
        author: RegisteredUser,
    ) -> None:
        published = await create_published(client, author, "Public")
        draft = await create_blog(client, author, title="Draft")
        bad = {"Authorization": "Bearer nonsense"}

        assert (await client.get(f"{BLOGS}/{published['id']}", headers=bad)).status_code == 200
        assert (await client.get(f"{BLOGS}/{draft['id']}", headers=bad)).status_code == 403

    @pytest.mark.asyncio
    async def test_draft_visibility(
        self,
        client: AsyncClient,
        author: RegisteredUser,
        reader: RegisteredUser,
    ) -> None:
        draft = await create_blog(client, author, title="Draft")
        url = f"{BLOGS}/{draft['id']}"

        anonymous = await client.get(url)
        other = await client.get(url, headers=reader.headers)
        own = await client.get(url, headers=author.headers)

        assert anonymous.status_code == 403
        assert anonymous.json() == {"detail": "Access denied"}
        assert other.status_code == 403
        assert own.status_code == 200
        assert own.json()["readCount"] == 1

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient) -> None:
        response = await client.get(f"{BLOGS}/{uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"detail": "Blog not found"}

    @pytest.mark.asyncio
    async def test_malformed_id(self, client: AsyncClient) -> None:
        response = await client.get(f"{BLOGS}/not-a-uuid")
        assert response.status_code == 400


class TestUpdateBlog:
    @pytest.mark.asyncio
    async def test_body_update_recomputes_reading_time(
        self,
        client: AsyncClient,
        author: RegisteredUser,
    ) -> None:
        blog = await create_blog(client, author, body=words(10))

        response = await client.put(
            f"{BLOGS}/{blog['id']}",
            json={"body": words(601), "description": "  Short  "},
            headers=author.headers,
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["readingTime"] == 4
        assert updated["description"] == "Short"
        assert updated["title"] == blog["title"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["readCount", "read_count", "readingTime", "state", "author", "authorId"])
    async def test_protected_fields_rejected(
        self,
        client: AsyncClient,
        author: RegisteredUser,
        field: str,
    ) -> None:
        blog = await create_blog(client, author)

        response = await client.put(
            f"{BLOGS}/{blog['id']}",
            json={"title": "New", field: 99},
            headers=author.headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field

        unchanged = await client.get(f"{BLOGS}/{blog['id']}", headers=author.headers)
        assert unchanged.json()["title"] == "A"
        assert unchanged.json()["state"] == "draft"

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, client: AsyncClient, author: RegisteredUser) -> None:
        blog = await create_blog(client, author)

        response = await client.put(
            f"{BLOGS}/{blog['id']}",
            json={"slug": "a"},
            headers=author.headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["type"] == "extra_forbidden"

    @pytest.mark.asyncio
    async def test_other_user_forbidden(
        self,
        client: AsyncClient,
        author: RegisteredUser,
        reader: RegisteredUser,
    ) -> None:
        blog = await create_published(client, author, "Mine")

        response = await client.put(
            f"{BLOGS}/{blog['id']}",
            json={"title": "Hijacked"},
            headers=reader.headers,
        )

        assert response.status_code == 403
        current = await client.get(f"{BLOGS}/{blog['id']}")
        assert current.json()["title"] == "Mine"

    @pytest.mark.asyncio
    async def test_missing_blog(self, client: AsyncClient, author: RegisteredUser) -> None:
        response = await client.put(f"{BLOGS}/{uuid4()}", json={"title": "x"}, headers=author.headers)
        assert response.status_code == 404


class TestChangeState:
    @pytest.mark.asyncio
    async def test_publish_and_unpublish(self, client: AsyncClient, author: RegisteredUser) -> None:
        blog = await create_blog(client, author)

        published = await publish(client, author, blog["id"])
        draft = await client.patch(
            f"{BLOGS}/{blog['id']}/state",
            json={"state": "draft"},
            headers=author.headers,
        )

        assert published["state"] == "published"
        assert draft.json()["state"] == "draft"

    @pytest.mark.asyncio
    async def test_same_state_is_noop(self, client: AsyncClient, author: RegisteredUser) -> None:
        blog = await create_blog(client, author)

        response = await client.patch(
            f"{BLOGS}/{blog['id']}/state",
            json={"state": "draft"},
            headers=author.headers,
        )

        assert response.status_code == 200
        assert response.json()["state"] == "draft"

    @pytest.mark.asyncio
    async def test_invalid_state_for_owner(self, client: AsyncClient, author: RegisteredUser) -> None:
        blog = await create_blog(client, author)

        response = await client.patch(
            f"{BLOGS}/{blog['id']}/state",
            json={"state": "archived"},
            headers=author.headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "state"

    @pytest.mark.asyncio
    async def test_invalid_state_checked_before_existence(
        self,
        client: AsyncClient,
        author: RegisteredUser,
    ) -> None:
        response = await client.patch(
            f"{BLOGS}/{uuid4()}/state",
            json={"state": "archived"},
            headers=author.headers,
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_other_user_forbidden(
        self,
        client: AsyncClient,
        author: RegisteredUser,
        reader: RegisteredUser,
    ) -> None:
        blog = await create_blog(client, author)

        response = await client.patch(
            f"{BLOGS}/{blog['id']}/state",
            json={"state": "published"},
            headers=reader.headers,
        )

        assert response.status_code == 403
        assert (await client.get(f"{BLOGS}/{blog['id']}")).status_code == 403


class TestDeleteBlog:
    @pytest.mark.asyncio
    async def test_owner_deletes(self, client: AsyncClient, author: RegisteredUser) -> None:
        blog = await create_published(client, author, "Gone")

        response = await client.delete(f"{BLOGS}/{blog['id']}", headers=author.headers)

        assert response.status_code == 204
        assert response.content == b""
        assert (await client.get(f"{BLOGS}/{blog['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_other_user_forbidden(
        self,
        client: AsyncClient,
        author: RegisteredUser,
        reader: RegisteredUser,
    ) -> None:
        blog = await create_published(client, author, "Stays")

        response = await client.delete(f"{BLOGS}/{blog['id']}", headers=reader.headers)

        assert response.status_code == 403
        assert (await client.get(f"{BLOGS}/{blog['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient, author: RegisteredUser) -> None:
        blog = await create_blog(client, author)
        assert (await client.delete(f"{BLOGS}/{blog['id']}")).status_code == 401


class TestListPublished:
    @pytest.mark.asyncio
    async def test_huge_page_is_empty_not_an_error(
        self,
        client: AsyncClient,
        author: RegisteredUser,
    ) -> None:
        await create_published(client, author, "Only")

        response = await client.get(BLOGS, params={"page": str(10**20), "limit": str(10**25)})

        body = response.json()
        assert response.status_code == 200
        assert body["items"] == []
        assert body["total"] == 1
        assert body["pages"] == 1
        assert body["page"] == 2**63 - 1

    @pytest.mark.asyncio
    async def test_only_published_with_paging_meta(
        self,
        client: AsyncClient,
        author: RegisteredUser,
    ) -> None:
        for index in range(3):
            await create_published(client, author, f"Post {index}")
        await create_blog(client, author, title="Draft")

        response = await client.get(BLOGS, params={"limit": 2})

        body = response.json()
        assert response.status_code == 200
        assert body["total"] == 3
        assert body["pages"] == 2
        assert body["page"] == 1
        assert body["countInPage"] == 2
        assert all(item["state"] == "published" for item in body["items"])
        assert body["items"][0]["author"]["firstName"] == "Ada"

    @pytest.mark.asyncio
    async def test_page_past_the_end(self, client: AsyncClient, author: RegisteredUser) -> None:
        await create_published(client, author, "Only")

        body = (await client.get(BLOGS, params={"page": 5})).json()

        assert body["items"] == []
        assert body["countInPage"] == 0
        assert body["total"] == 1

    @pytest.mark.asyncio
    async def test_bad_paging_values_fall_back(self, client: AsyncClient, author: RegisteredUser) -> None:
        await create_published(client, author, "Only")

        response = await client.get(BLOGS, params={"page": "abc", "limit": "-1"})

        assert response.status_code == 200
        assert response.json()["page"] == 1
        assert response.json()["countInPage"] == 1

    @pytest.mark.asyncio
    async def test_tag_filter(self, client: AsyncClient, author: RegisteredUser) -> None:
        await create_published(client, author, "X", tags=["x"])
        await create_published(client, author, "Y", tags=["y"])
        await create_published(client, author, "Z", tags=["z"])

        body = (await client.get(BLOGS, params={"tags": "x,y"})).json()

        assert sorted(item["title"] for item in body["items"]) == ["X", "Y"]

    @pytest.mark.asyncio
    async def test_title_filter(self, client: AsyncClient, author: RegisteredUser) -> None:
        await create_published(client, author, "Learning FastAPI")
        await create_published(client, author, "Cooking")

        body = (await client.get(BLOGS, params={"title": "fastapi"})).json()

        assert [item["title"] for item in body["items"]] == ["Learning FastAPI"]

    @pytest.mark.asyncio
    async def test_author_filter(
        self,
        client: AsyncClient,
        author: RegisteredUser,
        reader: RegisteredUser,
    ) -> None:
        await create_published(client, author, "By Ada")
        await create_published(client, reader, "By Grace")

        hopper = (await client.get(BLOGS, params={"author": "hop"})).json()
        nobody = (await client.get(BLOGS, params={"author": "Turing"})).json()

        assert [item["title"] for item in hopper["items"]] == ["By Grace"]
        assert nobody["total"] == 0

    @pytest.mark.asyncio
    async def test_order_by_read_count(self, client: AsyncClient, author: RegisteredUser) -> None:
        popular = await create_published(client, author, "Popular")
        quiet = await create_published(client, author, "Quiet")
        middle = await create_published(client, author, "Middle")
        for blog, reads in ((popular, 3), (middle, 1), (quiet, 0)):
            for _ in range(reads):
                await client.get(f"{BLOGS}/{blog['id']}")

        body = (await client.get(BLOGS, params={"order_by": "read_count"})).json()

        assert [item["title"] for item in body["items"]] == ["Popular", "Middle", "Quiet"]

    @pytest.mark.asyncio
    async def test_order_by_reading_time(self, client: AsyncClient, author: RegisteredUser) -> None:
        await create_published(client, author, "Short", body=words(10))
        await create_published(client, author, "Long", body=words(900))

        body = (await client.get(BLOGS, params={"order_by": "reading_time"})).json()

        assert [item["title"] for item in body["items"]] == ["Long", "Short"]


class TestListOwn:
    @pytest.mark.asyncio
    async def test_includes_drafts_and_filters_state(
        self,
        client: AsyncClient,
        register: Register,
    ) -> None:
        ada = await register()
        grace = await register(email="grace@example.com", first_name="Grace", last_name="Hopper")
        await create_published(client, ada, "Ada public")
        await create_blog(client, ada, title="Ada draft")
        await create_published(client, grace, "Grace public")

        everything = (await client.get(f"{BLOGS}/user/me", headers=ada.headers)).json()
        drafts = (
            await client.get(f"{BLOGS}/user/me", params={"state": "draft"}, headers=ada.headers)
        ).json()

        assert everything["total"] == 2
        assert sorted(item["title"] for item in everything["items"]) == ["Ada draft", "Ada public"]
        assert [item["title"] for item in drafts["items"]] == ["Ada draft"]
