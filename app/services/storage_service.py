"""
Storage Service para Certificados.

Este módulo proporciona acceso al almacenamiento de los PDFs emitidos:
- "s3": bucket S3 (o compatible) con ACL public-read
- "local": filesystem local, usado en modo offline para inspeccionar el PDF
"""

import hashlib
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import boto3

from app.core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURACIÓN
# =============================================================================

PUBLIC_READ_ACL = "public-read"
PDF_CONTENT_TYPE = "application/pdf"


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class UploadResult:
    """Resultado de una operación de upload."""

    key: str
    url: str
    size_bytes: int
    content_hash: str
    backend: str


# =============================================================================
# EXCEPCIONES
# =============================================================================


class StorageError(Exception):
    """Error base de storage."""

    pass


class StorageUploadError(StorageError):
    """Error al subir archivo."""

    pass


# =============================================================================
# SERVICIO PRINCIPAL
# =============================================================================


class StorageService:
    """
    Servicio de almacenamiento de artefactos.

    El backend se decide al construir el servicio (flag `offline`), nunca
    consultando el entorno en cada llamada.
    """

    def __init__(
        self,
        bucket: str,
        public_url_base: str,
        offline: bool = False,
        local_root: str = "storage",
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        client: Any = None,
    ):
        """
        Inicializa el servicio de storage.

        Args:
            bucket: Bucket destino
            public_url_base: Prefijo de las URLs públicas
            offline: Si True, escribe en disco en lugar de subir
            local_root: Directorio de salida en modo offline
            region_name: Región S3
            endpoint_url: Endpoint S3-compatible (ej. serverless-s3-local)
            access_key: Access Key ID
            secret_key: Secret Access Key
            client: Cliente boto3 ya construido (tests)
        """
        self._bucket = bucket
        self._public_url_base = public_url_base.rstrip("/")
        self._offline = offline
        self._local_root = Path(local_root).resolve()
        self._region_name = region_name
        self._endpoint_url = endpoint_url
        self._access_key = access_key
        self._secret_key = secret_key
        self._client = client

    @property
    def backend(self) -> str:
        return "local" if self._offline else "s3"

    def _local_path(self, key: str) -> Path:
        """Ruta bajo local_root; rechaza keys que escapan del directorio."""
        path = (self._local_root / key).resolve()
        if not path.is_relative_to(self._local_root):
            raise StorageUploadError(
                f"Key {key!r} resolves outside {self._local_root}"
            )
        return path

    def _get_client(self):
        """Obtiene o crea el cliente S3."""
        if self._client is None:
            kwargs: Dict[str, Any] = {}
            if self._region_name:
                kwargs["region_name"] = self._region_name
            if self._endpoint_url:
                kwargs["endpoint_url"] = self._endpoint_url
            if self._access_key and self._secret_key:
                kwargs["aws_access_key_id"] = self._access_key
                kwargs["aws_secret_access_key"] = self._secret_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    # =========================================================================
    # UPLOAD
    # =========================================================================

    def upload_bytes(
        self,
        data: bytes,
        key: str,
        content_type: str = PDF_CONTENT_TYPE,
        public: bool = True,
    ) -> UploadResult:
        """
        Guarda bytes bajo `key`, sobrescribiendo cualquier versión previa.

        Args:
            data: Contenido a subir
            key: Key (path) en el bucket
            content_type: MIME type
            public: Aplica ACL public-read (solo S3)

        Returns:
            UploadResult con detalles de la operación

        Raises:
            StorageUploadError: si el backend rechaza la escritura
        """
        content_hash = hashlib.sha256(data).hexdigest()

        if self._offline:
            path = self._local_path(key)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(data)
            except OSError as e:
                raise StorageUploadError(f"Error writing {path}: {e}") from e

            logger.info(f"Wrote {len(data)} bytes to local {path}")
            return UploadResult(
                key=key,
                url=str(path),
                size_bytes=len(data),
                content_hash=content_hash,
                backend=self.backend,
            )

        client = self._get_client()
        extra_args = {"ContentType": content_type}
        if public:
            extra_args["ACL"] = PUBLIC_READ_ACL

        try:
            client.put_object(Bucket=self._bucket, Key=key, Body=data, **extra_args)
        except Exception as e:
            logger.error(f"Error uploading to {self._bucket}/{key}: {e}")
            raise StorageUploadError(
                f"Error uploading to {self._bucket}/{key}: {e}"
            ) from e

        logger.info(f"Uploaded {len(data)} bytes to {self._bucket}/{key}")
        return UploadResult(
            key=key,
            url=self.get_public_url(key),
            size_bytes=len(data),
            content_hash=content_hash,
            backend=self.backend,
        )

    # =========================================================================
    # URLS
    # =========================================================================

    def get_public_url(self, key: str) -> str:
        """URL pública derivada solo de la key; no comprueba que el objeto exista."""
        return f"{self._public_url_base}/{key}"

    # =========================================================================
    # HEALTH CHECK
    # =========================================================================

    def health_check(self) -> Dict[str, Any]:
        """
        Verifica el estado de la conexión con storage.

        Returns:
            Dict con status y detalles
        """
        try:
            if self._offline:
                self._local_root.mkdir(parents=True, exist_ok=True)
                return {
                    "status": "healthy",
                    "backend": "local",
                    "root": str(self._local_root),
                    "accessible": True,
                }

            client = self._get_client()
            client.head_bucket(Bucket=self._bucket)
            return {
                "status": "healthy",
                "backend": "s3",
                "bucket": self._bucket,
                "accessible": True,
            }
        except Exception as e:
            return {
                "status": "unhealthy",
                "backend": self.backend,
                "accessible": False,
                "error": str(e),
            }


# =============================================================================
# FACTORY FUNCTION
# =============================================================================


@lru_cache
def get_storage_service() -> StorageService:
    """
    Factory function para obtener la instancia de StorageService.

    Usar como dependency injection en FastAPI:
        @router.post("")
        def issue(storage: StorageService = Depends(get_storage_service)):
            ...
    """
    secret = settings.AWS_SECRET_ACCESS_KEY
    return StorageService(
        bucket=settings.AWS_BUCKET_NAME,
        public_url_base=settings.AWS_URL_FILE,
        offline=settings.IS_OFFLINE,
        local_root=settings.OFFLINE_OUTPUT_DIR,
        region_name=settings.AWS_REGION,
        endpoint_url=settings.AWS_ENDPOINT_URL,
        access_key=settings.AWS_ACCESS_KEY_ID,
        secret_key=secret.get_secret_value() if secret else None,
    )
