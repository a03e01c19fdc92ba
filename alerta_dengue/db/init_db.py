import logging

from alerta_dengue.db.base import Base
from alerta_dengue.db.session import engine

logger = logging.getLogger(__name__)

async def init_db() -> None:
    """
    Garante que as tabelas existam.
    Chamada na inicialização da aplicação, depois das migrações; é uma
    salvaguarda caso o Alembic não tenha sido executado.
    """
    logger.info("Garantindo que todas as tabelas foram criadas...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tabelas verificadas/criadas.")
