"""
Fronteira de persistência para usuários e denúncias.

Leituras devolvem o registro ou None; ausência nunca é sinalizada com
exceção. Violações de unicidade de username/email viram DuplicateIdentity.
"""

from datetime import datetime
from typing import List, Optional, Protocol

from alerta_dengue.models.report import Report
from alerta_dengue.models.user import User


class ReportStore(Protocol):
    async def insert_user(self, user: User) -> User: ...

    async def find_user_by_id(self, user_id: int) -> Optional[User]: ...

    async def find_user_by_username(self, username: str) -> Optional[User]: ...

    async def find_user_by_email(self, email: str) -> Optional[User]: ...

    async def insert_report(self, report: Report) -> Report: ...

    async def find_report_by_id(self, report_id: int) -> Optional[Report]: ...

    async def list_reports_by_owner(self, owner_id: int) -> List[Report]: ...

    async def list_all_reports(self) -> List[Report]: ...

    async def update_report_status(self, report_id: int, status: str, updated_at: datetime) -> Optional[Report]: ...
