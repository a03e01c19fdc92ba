# Reúne todos os modelos em um único lugar para que Base.metadata os conheça
# (create_all em init_db e autogenerate do Alembic).

from alerta_dengue.db.base_class import Base
from alerta_dengue.models.user import User
from alerta_dengue.models.report import Report
