"""
Certificados - Endpoints de Certificados

Endpoints:
- POST /             - Emitir (o re-emitir) certificado y subir el PDF
- GET /{certificate_id} - Verificar autenticidad (el id puede contener "/")

Idempotency:
-----------
The record is created only on the first POST for an id. Later POSTs with the
same id keep the stored record but regenerate and overwrite the PDF with the
values sent in that request.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_certificate_service
from app.schemas.certificate import (
    INVALID_MESSAGE,
    VALID_MESSAGE,
    CertificateCreate,
    CertificateInvalidResponse,
    CertificateIssuedResponse,
    CertificateValidResponse,
)
from app.schemas.error import ERROR_RESPONSES
from app.services.certificate_service import CertificateService

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CertificateIssuedResponse,
    responses={500: ERROR_RESPONSES[500]},
    summary="Issue certificate",
    description="""
    Stores the certificate record (first issuance only), renders the PDF and
    uploads it as `{id}.pdf` with public-read access.

    Re-issuing an existing id answers with the same success body.

    ---
    Guarda el registro (solo en la primera emisión), genera el PDF y lo sube
    como `{id}.pdf` con lectura pública.
    """,
)
def issue_certificate(
    request: CertificateCreate,
    service: CertificateService = Depends(get_certificate_service),
):
    """Emite un certificado."""
    result = service.issue(request.id, request.name, request.grade)
    return CertificateIssuedResponse(message=result.message, url=result.url)


@router.get(
    "/{certificate_id:path}",
    status_code=status.HTTP_201_CREATED,
    response_model=CertificateValidResponse,
    responses={
        400: {"model": CertificateInvalidResponse, "description": "Invalid certificate"},
        500: ERROR_RESPONSES[500],
    },
    summary="Verify certificate",
    description="""
    Public verification endpoint. Answers `201` with the stored recipient name
    and the PDF URL when the id exists, `400` otherwise.

    ---
    Endpoint público de verificación. Devuelve el nombre registrado y la URL
    del PDF si el id existe.
    """,
)
def verify_certificate(
    certificate_id: str,
    service: CertificateService = Depends(get_certificate_service),
):
    """Valida si el certificado es real."""
    result = service.verify(certificate_id)

    if not result.valid:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=CertificateInvalidResponse(message=INVALID_MESSAGE).model_dump(),
        )

    return CertificateValidResponse(
        message=VALID_MESSAGE, name=result.name, url=result.url
    )
