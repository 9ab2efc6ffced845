from sqlalchemy import Column, String

from app.core.config import settings
from app.db.base import Base, TimestampMixin


class UserCertificate(Base, TimestampMixin):
    """Registro durable de emisión. Una fila por id, nunca se actualiza."""

    __tablename__ = settings.CERTIFICATES_TABLE

    # Identificador asignado por quien solicita la emisión
    id = Column(String, primary_key=True)

    name = Column(String, nullable=False)  # Nombre del destinatario
    grade = Column(String, nullable=False)  # Nota / nivel

    def __repr__(self) -> str:
        return f"<UserCertificate id={self.id!r}>"
