"""
Certificados Services Module.

Services:
    - CertificateRecordStore: record store adapter (SQLAlchemy)
    - StorageService: artifact store adapter (S3 / local offline)
    - template_service: certificate markup rendering (Jinja2)
    - pdf_service: markup to PDF composition (WeasyPrint)
    - CertificateService: issuance and verification workflows
"""

from .certificate_service import CertificateService, IssueResult, VerificationResult
from .pdf_service import PageOptions, compose
from .record_store import CertificateRecordStore
from .storage_service import StorageError, StorageService, StorageUploadError, UploadResult

__all__ = [
    "CertificateRecordStore",
    "CertificateService",
    "IssueResult",
    "PageOptions",
    "StorageError",
    "StorageService",
    "StorageUploadError",
    "UploadResult",
    "VerificationResult",
    "compose",
]
