"""Tests for the SQLAlchemy Unit of Work against the test database."""

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import StoreError, UserAlreadyExistsError
from domain.entities.user import User
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def _user(email: str) -> User:
    return User(name="Ann", email=email, password_hash="x")


class TestSQLAlchemyUnitOfWork:
    @pytest.mark.asyncio
    async def test_commit_persists(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        email = f"uow-{uuid4().hex[:8]}@example.com"

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            created = await uow.users.create(_user(email))
            await uow.commit()

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            found = await uow.users.get_by_email(email.upper())

        assert found is not None
        assert found.id == created.id

    @pytest.mark.asyncio
    async def test_uncommitted_work_is_discarded(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        email = f"uow-{uuid4().hex[:8]}@example.com"

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            await uow.users.create(_user(email))

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            assert await uow.users.get_by_email(email) is None

    @pytest.mark.asyncio
    async def test_store_failure_becomes_store_error(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        email = f"uow-{uuid4().hex[:8]}@example.com"
        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            created = await uow.users.create(_user(email))
            await uow.commit()

        # Same primary key, different email
        clash = User(
            id=created.id,
            name="Bob",
            email=f"uow-{uuid4().hex[:8]}@example.com",
            password_hash="x",
        )
        with pytest.raises(StoreError) as exc_info:
            async with SQLAlchemyUnitOfWork(session_factory) as uow:
                await uow.users.create(clash)

        assert exc_info.value.message == "Server error"

    @pytest.mark.asyncio
    async def test_email_taken_by_concurrent_insert(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        email = f"uow-{uuid4().hex[:8]}@example.com"
        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            await uow.users.create(_user(email))
            await uow.commit()

        # Skips the service-level lookup, as the losing request of a race would
        with pytest.raises(UserAlreadyExistsError) as exc_info:
            async with SQLAlchemyUnitOfWork(session_factory) as uow:
                await uow.users.create(_user(email.upper()))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "User already exists"

    @pytest.mark.asyncio
    async def test_repositories_need_context(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        uow = SQLAlchemyUnitOfWork(session_factory)

        with pytest.raises(RuntimeError):
            uow.posts
