from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

ISSUED_MESSAGE = "Certificate created!"
VALID_MESSAGE = "Valid certificate"
INVALID_MESSAGE = "Invalid certificate"


class CertificateCreate(BaseModel):
    """Cuerpo de emisión. Sin validación de formato: se acepta tal cual."""

    id: str = Field(..., description="Identificador asignado por quien emite")
    name: str = Field(..., description="Nombre del destinatario")
    grade: str = Field(..., description="Nota o nivel del destinatario")

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": "u1", "name": "Ada", "grade": "A"}}
    )


class CertificateIssuedResponse(BaseModel):
    message: str = ISSUED_MESSAGE
    url: str


class CertificateValidResponse(BaseModel):
    message: str = VALID_MESSAGE
    name: str
    url: str


class CertificateInvalidResponse(BaseModel):
    message: str = INVALID_MESSAGE


@dataclass(frozen=True)
class CertificateDocument:
    """Datos efímeros que recibe la plantilla en cada emisión."""

    id: str
    name: str
    grade: str
    date: str  # DD/MM/YYYY
    medal: str  # emblema en base64
