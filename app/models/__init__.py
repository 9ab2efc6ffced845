"""
Modelos ORM del servicio de certificados.

Uso:
    from app.models import UserCertificate
"""

from app.db.base import Base

from .certificate import UserCertificate

__all__ = ["Base", "UserCertificate"]
