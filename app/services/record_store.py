"""
Adaptador del almacén de registros de certificados.

Envuelve la tabla `users_certificates` detrás de dos operaciones:
- find_by_id: consulta por clave
- insert: put condicional (nunca sobrescribe un id existente)
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.certificate import UserCertificate

logger = logging.getLogger(__name__)


class CertificateRecordStore:
    """Acceso a registros de emisión sobre una sesión SQLAlchemy."""

    def __init__(self, db: Session):
        self._db = db

    def find_by_id(self, certificate_id: str) -> Optional[UserCertificate]:
        """Devuelve el registro con ese id, o None."""
        return (
            self._db.query(UserCertificate)
            .filter(UserCertificate.id == certificate_id)
            .first()
        )

    def insert(self, record: UserCertificate) -> bool:
        """
        Inserta el registro si su id no existe todavía.

        La unicidad la garantiza la clave primaria: si otra emisión
        concurrente ganó la carrera, el INSERT falla, se hace rollback y
        el registro existente queda intacto.

        Returns:
            True si se insertó, False si el id ya estaba registrado

        Raises:
            IntegrityError: si la violación no es un id duplicado
                (ej. name o grade nulos)
        """
        certificate_id = record.id
        self._db.add(record)
        try:
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            if self.find_by_id(certificate_id) is None:
                raise
            logger.info(f"Certificate record {certificate_id} already exists, keeping it")
            return False

        logger.info(f"Inserted certificate record {certificate_id}")
        return True
