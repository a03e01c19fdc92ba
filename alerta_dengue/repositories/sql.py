import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from alerta_dengue.core.errors import DuplicateIdentity
from alerta_dengue.models.report import Report
from alerta_dengue.models.user import User

logger = logging.getLogger(__name__)


class SqlAlchemyReportStore:
    """ReportStore sobre uma AsyncSession. Cada escrita é confirmada na hora."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert_user(self, user: User) -> User:
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.info(f"Registro recusado por violação de unicidade: {user.username}")
            raise DuplicateIdentity() from exc
        return user

    async def find_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def find_user_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(func.lower(User.username) == username.lower()))
        return result.scalar_one_or_none()

    async def find_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(func.lower(User.email) == email.lower()))
        return result.scalar_one_or_none()

    async def insert_report(self, report: Report) -> Report:
        self.db.add(report)
        await self.db.commit()
        return report

    async def find_report_by_id(self, report_id: int) -> Optional[Report]:
        return await self.db.get(Report, report_id)

    async def list_reports_by_owner(self, owner_id: int) -> List[Report]:
        query = (
            select(Report)
            .where(Report.user_id == owner_id)
            .order_by(Report.created_at.desc(), Report.id.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_all_reports(self) -> List[Report]:
        query = select(Report).order_by(Report.created_at.desc(), Report.id.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_report_status(self, report_id: int, status: str, updated_at: datetime) -> Optional[Report]:
        report = await self.db.get(Report, report_id)
        if report is None:
            return None
        report.status = status
        report.updated_at = updated_at
        await self.db.commit()
        return report
