from typing import List

from fastapi import APIRouter, Depends, status

from alerta_dengue.core.deps import get_current_user, get_report_service
from alerta_dengue.models.report import ReportStatus
from alerta_dengue.models.user import User
from alerta_dengue.schemas.report import (
    ReportCreate,
    ReportResponse,
    StatusList,
    StatusOption,
    StatusUpdate,
)
from alerta_dengue.services.reports import ReportService

router = APIRouter()

@router.get("/reports", response_model=List[ReportResponse])
async def list_reports(
    current_user: User = Depends(get_current_user),
    reports: ReportService = Depends(get_report_service),
):
    """
    Lista todas as denúncias (exibição no mapa geral).
    """
    return await reports.list_all()

@router.get("/user/reports", response_model=List[ReportResponse])
async def list_my_reports(
    current_user: User = Depends(get_current_user),
    reports: ReportService = Depends(get_report_service),
):
    """
    Lista as denúncias do usuário autenticado.
    """
    return await reports.list_mine(current_user.id)

@router.get("/reports/statuses", response_model=StatusList)
async def list_statuses(current_user: User = Depends(get_current_user)):
    """
    Status possíveis de uma denúncia, com o rótulo de exibição.
    """
    return StatusList(
        initial=ReportStatus.initial(),
        items=[StatusOption(value=s, label=s.label) for s in ReportService.statuses()],
    )

@router.get("/reports/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: int,
    current_user: User = Depends(get_current_user),
    reports: ReportService = Depends(get_report_service),
):
    """
    Obtém uma denúncia pelo ID.
    """
    return await reports.get(report_id)

@router.post("/reports", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    report_in: ReportCreate,
    current_user: User = Depends(get_current_user),
    reports: ReportService = Depends(get_report_service),
):
    """
    Registra uma nova denúncia para o usuário autenticado.

    Exemplo:
    ```json
    {
        "title": "Água parada",
        "description": "Poça no terreno",
        "address": "Rua X, 100",
        "latitude": -23.55,
        "longitude": -46.63
    }
    ```
    """
    return await reports.submit(current_user.id, report_in)

@router.patch("/reports/{report_id}/status", response_model=ReportResponse)
async def update_report_status(
    report_id: int,
    status_in: StatusUpdate,
    current_user: User = Depends(get_current_user),
    reports: ReportService = Depends(get_report_service),
):
    """
    Altera o status de uma denúncia. Apenas o autor da denúncia pode alterá-la.
    """
    return await reports.update_status(report_id, current_user.id, status_in.status)
