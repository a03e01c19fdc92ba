import logging
from typing import Any, List, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from alerta_dengue.core.authorization import require_ownership
from alerta_dengue.core.errors import InvalidStatus, NotFound
from alerta_dengue.core.metrics import REPORTS_SUBMITTED, STATUS_CHANGES
from alerta_dengue.core.security import utcnow
from alerta_dengue.models.report import Report, ReportStatus
from alerta_dengue.repositories.base import ReportStore
from alerta_dengue.schemas.report import ReportCreate
from alerta_dengue.services.validation import validation_error_from

logger = logging.getLogger(__name__)


class ReportService:
    """
    Ciclo de vida das denúncias: registro, consulta e mudança de status.

    Transições de status não têm restrição além de pertencer à enumeração.
    Atualizações concorrentes da mesma denúncia não são ordenadas: vale a
    última escrita.
    """

    def __init__(self, store: ReportStore):
        self.store = store

    async def submit(self, owner_id: int, draft: Union[ReportCreate, Mapping[str, Any]]) -> Report:
        """
        Valida o rascunho e grava a denúncia com o status inicial.
        Nada é gravado se algum campo estiver ausente ou inválido.
        """
        if not isinstance(draft, ReportCreate):
            try:
                draft = ReportCreate.model_validate(draft)
            except PydanticValidationError as exc:
                raise validation_error_from(exc) from exc

        now = utcnow()
        report = Report(
            user_id=owner_id,
            title=draft.title,
            description=draft.description,
            address=draft.address,
            latitude=draft.latitude,
            longitude=draft.longitude,
            status=ReportStatus.initial().value,
            created_at=now,
            updated_at=now,
        )
        report = await self.store.insert_report(report)

        REPORTS_SUBMITTED.inc()
        logger.info(f"Denúncia {report.id} registrada pelo usuário {owner_id}")
        return report

    async def list_mine(self, owner_id: int) -> List[Report]:
        return await self.store.list_reports_by_owner(owner_id)

    async def list_all(self) -> List[Report]:
        # Visível a qualquer usuário autenticado (mapa geral)
        return await self.store.list_all_reports()

    async def get(self, report_id: int) -> Report:
        report = await self.store.find_report_by_id(report_id)
        if report is None:
            raise NotFound("Denúncia não encontrada")
        return report

    async def update_status(self, report_id: int, caller_id: int, new_status: str) -> Report:
        report = await self.get(report_id)

        status = ReportStatus.parse(new_status)
        if status is None:
            raise InvalidStatus(
                f"Status inválido: '{new_status}'. Use um de: {', '.join(s.value for s in ReportStatus)}"
            )

        require_ownership(caller_id, report.user_id)

        updated = await self.store.update_report_status(report.id, status.value, utcnow())
        if updated is None:
            raise NotFound("Denúncia não encontrada")

        STATUS_CHANGES.labels(status=status.value).inc()
        logger.info(f"Denúncia {report_id} alterada para '{status.value}' pelo usuário {caller_id}")
        return updated

    @staticmethod
    def statuses() -> List[ReportStatus]:
        return list(ReportStatus)
