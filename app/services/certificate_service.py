"""
Flujos de emisión y verificación de certificados.

Emisión:
    consulta por id -> insert condicional -> render -> PDF -> upload -> URL
Verificación:
    consulta por id -> válido/inválido -> nombre almacenado + URL

El registro guardado en la primera emisión es el que responde la
verificación; el PDF, en cambio, se regenera en cada emisión con los datos
de la petición actual.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

import structlog

from app.models.certificate import UserCertificate
from app.schemas.certificate import ISSUED_MESSAGE, CertificateDocument
from app.services.assets import load_emblem_base64
from app.services.pdf_service import CERTIFICATE_PAGE, PageOptions, compose
from app.services.record_store import CertificateRecordStore
from app.services.storage_service import PDF_CONTENT_TYPE, StorageService
from app.services.template_service import render_certificate

logger = structlog.get_logger(__name__)

DATE_FORMAT = "%d/%m/%Y"


@dataclass
class IssueResult:
    message: str
    url: str


@dataclass
class VerificationResult:
    valid: bool
    name: Optional[str] = None
    url: Optional[str] = None


def artifact_key(certificate_id: str) -> str:
    return f"{certificate_id}.pdf"


class CertificateService:
    """
    Orquesta emisión y verificación.

    Colaboradores inyectados:
        store: adaptador de registros
        storage: adaptador de artefactos (S3 o disco en modo offline)
        base_url: prefijo público de los PDFs
        composer: markup -> bytes PDF
        renderer: documento -> markup
        today: reloj (tests)
    """

    def __init__(
        self,
        store: CertificateRecordStore,
        storage: StorageService,
        base_url: str,
        composer: Callable[[str, PageOptions], bytes] = compose,
        renderer: Callable[[CertificateDocument], str] = render_certificate,
        today: Callable[[], date] = date.today,
    ):
        self._store = store
        self._storage = storage
        self._base_url = base_url.rstrip("/")
        self._composer = composer
        self._renderer = renderer
        self._today = today

    def artifact_url(self, certificate_id: str) -> str:
        """URL pública determinista: {base_url}/{id}.pdf"""
        return f"{self._base_url}/{artifact_key(certificate_id)}"

    def build_document(
        self, certificate_id: str, name: str, grade: str
    ) -> CertificateDocument:
        return CertificateDocument(
            id=certificate_id,
            name=name,
            grade=grade,
            date=self._today().strftime(DATE_FORMAT),
            medal=load_emblem_base64(),
        )

    def issue(self, certificate_id: str, name: str, grade: str) -> IssueResult:
        """
        Emite (o re-emite) un certificado.

        El registro se crea solo la primera vez; el PDF se regenera y
        sobrescribe siempre, con el nombre y la nota de esta petición.
        Cualquier fallo se propaga sin deshacer el registro insertado.
        """
        existing = self._store.find_by_id(certificate_id)
        if existing is None:
            created = self._store.insert(
                UserCertificate(id=certificate_id, name=name, grade=grade)
            )
            if created:
                logger.info("certificate_record_created", certificate_id=certificate_id)

        document = self.build_document(certificate_id, name, grade)
        markup = self._renderer(document)
        pdf_bytes = self._composer(markup, CERTIFICATE_PAGE)

        upload = self._storage.upload_bytes(
            data=pdf_bytes,
            key=artifact_key(certificate_id),
            content_type=PDF_CONTENT_TYPE,
            public=True,
        )

        url = self.artifact_url(certificate_id)
        logger.info(
            "certificate_issued",
            certificate_id=certificate_id,
            reissued=existing is not None,
            backend=upload.backend,
            location=upload.url,
            size_bytes=upload.size_bytes,
            content_hash=upload.content_hash,
        )
        return IssueResult(message=ISSUED_MESSAGE, url=url)

    def verify(self, certificate_id: str) -> VerificationResult:
        """Consulta el registro; no comprueba que el PDF exista en el bucket."""
        record = self._store.find_by_id(certificate_id)
        if record is None:
            logger.info("certificate_not_found", certificate_id=certificate_id)
            return VerificationResult(valid=False)

        logger.info("certificate_verified", certificate_id=certificate_id)
        return VerificationResult(
            valid=True, name=record.name, url=self.artifact_url(certificate_id)
        )
