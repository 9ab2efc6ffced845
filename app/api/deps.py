from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.services.certificate_service import CertificateService
from app.services.record_store import CertificateRecordStore
from app.services.storage_service import StorageService, get_storage_service


def get_certificate_service(
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> CertificateService:
    """
    Certificate workflow dependency, bound to the request's DB session.

    Usage:
        @router.post("")
        def issue(service: CertificateService = Depends(get_certificate_service)):
            ...
    """
    return CertificateService(
        store=CertificateRecordStore(db),
        storage=storage,
        base_url=settings.AWS_URL_FILE,
    )
