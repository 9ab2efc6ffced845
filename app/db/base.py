from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Clase Base de la que heredan todos los modelos
Base = declarative_base()


class TimestampMixin:
    """Añade created_at automático"""

    created_at = Column(DateTime(timezone=True), server_default=func.now())
