from datetime import datetime
from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alerta_dengue.db.base_class import Base
from alerta_dengue.core.security import utcnow

class User(Base):
    """
    Cidadão cadastrado. Não é alterado depois do registro.
    Username e email são únicos sem diferenciar maiúsculas de minúsculas.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relacionamentos
    reports = relationship("Report", back_populates="owner")

# Unicidade sem diferenciar maiúsculas de minúsculas
Index("uq_users_username_lower", func.lower(User.username), unique=True)
Index("uq_users_email_lower", func.lower(User.email), unique=True)
