from sqlalchemy.orm import DeclarativeBase, declared_attr

class Base(DeclarativeBase):
    """
    Classe base para os modelos SQLAlchemy.

    O nome da tabela é derivado do nome da classe no plural
    (User -> users, Report -> reports).
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"
