import itertools
from datetime import datetime
from typing import Dict, List, Optional

from alerta_dengue.core.errors import DuplicateIdentity
from alerta_dengue.models.report import Report
from alerta_dengue.models.user import User


def _newest_first(reports: List[Report]) -> List[Report]:
    return sorted(reports, key=lambda r: (r.created_at, r.id), reverse=True)


class MemoryReportStore:
    """ReportStore em memória, com ids incrementais. Usado em testes."""

    def __init__(self) -> None:
        self.users: Dict[int, User] = {}
        self.reports: Dict[int, Report] = {}
        self._user_ids = itertools.count(1)
        self._report_ids = itertools.count(1)

    async def insert_user(self, user: User) -> User:
        if await self.find_user_by_username(user.username):
            raise DuplicateIdentity("Nome de usuário já registrado")
        if await self.find_user_by_email(user.email):
            raise DuplicateIdentity("Email já registrado")

        user.id = next(self._user_ids)
        self.users[user.id] = user
        return user

    async def find_user_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    async def find_user_by_username(self, username: str) -> Optional[User]:
        wanted = username.lower()
        return next((u for u in self.users.values() if u.username.lower() == wanted), None)

    async def find_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        return next((u for u in self.users.values() if u.email.lower() == wanted), None)

    async def insert_report(self, report: Report) -> Report:
        report.id = next(self._report_ids)
        self.reports[report.id] = report
        return report

    async def find_report_by_id(self, report_id: int) -> Optional[Report]:
        return self.reports.get(report_id)

    async def list_reports_by_owner(self, owner_id: int) -> List[Report]:
        return _newest_first([r for r in self.reports.values() if r.user_id == owner_id])

    async def list_all_reports(self) -> List[Report]:
        return _newest_first(list(self.reports.values()))

    async def update_report_status(self, report_id: int, status: str, updated_at: datetime) -> Optional[Report]:
        report = self.reports.get(report_id)
        if report is None:
            return None
        report.status = status
        report.updated_at = updated_at
        return report
