"""Fixtures for service tests running against the in-memory database."""

from pytest import fixture
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import UserDB
from blog_api.repositories import BlogRepository, UserRepository
from blog_api.schemas import UserCreate
from blog_api.services import BlogService


@fixture
def user_repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@fixture
def blog_service(session: AsyncSession, user_repo: UserRepository) -> BlogService:
    return BlogService(BlogRepository(session), user_repo)


async def make_user(
    repo: UserRepository,
    email: str,
    first_name: str,
    last_name: str,
) -> UserDB:
    payload = UserCreate.model_validate(
        {"firstName": first_name, "lastName": last_name, "email": email, "password": "password123"},
    )
    # Hash content is irrelevant to blog rules
    return await repo.create(payload, password_hash="not-a-real-hash")


@fixture
async def owner(user_repo: UserRepository) -> UserDB:
    return await make_user(user_repo, "ada@example.com", "Ada", "Lovelace")


@fixture
async def stranger(user_repo: UserRepository) -> UserDB:
    return await make_user(user_repo, "grace@example.com", "Grace", "Hopper")
