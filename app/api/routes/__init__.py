# Exportar todos los routers
from . import certificates, health

__all__ = ["certificates", "health"]
