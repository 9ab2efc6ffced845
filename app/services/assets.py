"""
Recursos estáticos del certificado.

La plantilla y el emblema se leen una sola vez por proceso y se reutilizan
en cada emisión. Nunca se modifican.
"""

import base64
from functools import lru_cache
from pathlib import Path

# Rutas de Recursos
BASE_DIR = Path(__file__).resolve().parent.parent
ASSETS_DIR = BASE_DIR / "assets"
TEMPLATES_DIR = BASE_DIR / "templates"

EMBLEM_PATH = ASSETS_DIR / "emblem.svg"
CERTIFICATE_TEMPLATE_PATH = TEMPLATES_DIR / "certificate.html"


@lru_cache(maxsize=1)
def load_certificate_template() -> str:
    """Texto de la plantilla HTML del certificado."""
    return CERTIFICATE_TEMPLATE_PATH.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def load_emblem_base64() -> str:
    """Emblema codificado en base64, listo para un data URI."""
    return base64.b64encode(EMBLEM_PATH.read_bytes()).decode("ascii")
