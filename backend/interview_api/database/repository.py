"""
Talent and career path lookups.
"""
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from interview_api.models.talent import CareerPath, Talent


class TalentRepository(Protocol):
    async def get_talent(self, talent_id: str) -> Talent | None: ...

    async def get_career_path(self, path_id: str) -> CareerPath | None: ...


class SqlTalentRepository:
    """TalentRepository backed by an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_talent(self, talent_id: str) -> Talent | None:
        result = await self.session.execute(
            select(Talent).where(Talent.talent_id == talent_id).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_career_path(self, path_id: str) -> CareerPath | None:
        return await self.session.get(CareerPath, path_id)
