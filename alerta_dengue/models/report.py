import enum
from datetime import datetime
from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alerta_dengue.db.base_class import Base
from alerta_dengue.core.security import utcnow

class ReportStatus(str, enum.Enum):
    """Situação de uma denúncia. Qualquer status pode ir para qualquer outro."""

    PENDENTE = "pendente"
    EM_ANDAMENTO = "em_andamento"
    RESOLVIDO = "resolvido"
    CANCELADO = "cancelado"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @classmethod
    def initial(cls) -> "ReportStatus":
        return cls.PENDENTE

    @classmethod
    def parse(cls, value: str) -> "ReportStatus | None":
        try:
            return cls(value)
        except ValueError:
            return None

STATUS_LABELS = {
    ReportStatus.PENDENTE: "Pendente",
    ReportStatus.EM_ANDAMENTO: "Em Andamento",
    ReportStatus.RESOLVIDO: "Resolvido",
    ReportStatus.CANCELADO: "Cancelado",
}

class Report(Base):
    """
    Denúncia de foco do mosquito, sempre ligada a um único usuário.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ReportStatus.PENDENTE.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relacionamento
    owner = relationship("User", back_populates="reports")
