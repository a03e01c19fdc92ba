import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# alembic.ini fica na raiz do projeto (alerta_dengue/db/migrations.py -> ../../)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"

async def run_migrations() -> bool:
    """
    Executa `alembic upgrade head` em um subprocesso.

    Raises:
        FileNotFoundError: se alembic.ini não existir.
        RuntimeError: se o Alembic terminar com código diferente de zero.
    """
    logger.info("Aplicando migrações do banco de dados...")
    if not ALEMBIC_INI.is_file():
        logger.error(f"Arquivo de configuração do Alembic não encontrado: {ALEMBIC_INI}")
        raise FileNotFoundError(f"Arquivo de configuração do Alembic não encontrado: {ALEMBIC_INI}")

    process = await asyncio.create_subprocess_exec(
        "alembic", "-c", str(ALEMBIC_INI), "upgrade", "head",
        cwd=str(PROJECT_ROOT),
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE
    )
    stdout, stderr = await process.communicate()

    if process.returncode != 0:
        error_msg = stderr.decode().strip() if stderr else "Código de saída não-zero"
        logger.error(f"Erro ao aplicar migrações: {error_msg}")
        raise RuntimeError(f"Falha ao aplicar migrações Alembic: {error_msg}")

    logger.info("Migrações aplicadas com sucesso!")
    if stdout:
        logger.debug(f"Saída das migrações: {stdout.decode().strip()}")
    return True
