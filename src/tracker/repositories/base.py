"""Shared query helpers for the tracker's tables."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import TimestampMixin

RecordT = TypeVar("RecordT", bound=TimestampMixin)


class Repository(Generic[RecordT]):
    """Wrap one ``AsyncSession`` and the table named by ``model``.

    Writes only flush; the calling service decides when to commit or roll back.
    """

    model: ClassVar[type[Any]]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, record_id: str) -> RecordT | None:
        return await self.session.get(self.model, record_id)

    async def save(self, record: RecordT) -> RecordT:
        self.session.add(record)
        await self.session.flush()
        return record

    async def remove(self, record: RecordT) -> None:
        await self.session.delete(record)
        await self.session.flush()

    async def reload(self, record: RecordT) -> RecordT:
        await self.session.refresh(record)
        return record

    async def select_where(self, *criteria: Any, limit: int | None = None) -> list[RecordT]:
        """Rows matching every criterion, oldest first with ``id`` breaking ties."""
        statement = (
            select(self.model)
            .where(*criteria)
            .order_by(self.model.created_at, self.model.id)
        )
        if limit is not None:
            statement = statement.limit(limit)
        result = await self.session.execute(statement)
        return list(result.scalars().all())


class OwnedRepository(Repository[RecordT]):
    """Tables whose rows carry an ``owner_id`` and belong to exactly one user."""

    async def get_owned(self, record_id: str, owner_id: str) -> RecordT:
        """Return the row if ``owner_id`` owns it.

        Raises ``ValueError`` for an unknown id and ``PermissionError`` when the
        row belongs to another user.
        """
        record = await self.find(record_id)
        label = self.model.__name__
        if record is None:
            raise ValueError(f"{label} {record_id} does not exist")
        if record.owner_id != owner_id:  # type: ignore[attr-defined]
            raise PermissionError(f"{label} {record_id} is not owned by {owner_id}")
        return record

    async def list_for_owner(self, owner_id: str, *criteria: Any) -> list[RecordT]:
        return await self.select_where(self.model.owner_id == owner_id, *criteria)


__all__ = ["OwnedRepository", "Repository"]
