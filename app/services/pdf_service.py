"""
Módulo de Composición de Certificados PDF.

Convierte el HTML renderizado en un documento PDF paginado de layout fijo.
Utiliza WeasyPrint como motor headless (HTML/CSS -> PDF).

El formato de página se inyecta como hoja de estilos de usuario: así las
reglas `@page` de la propia plantilla tienen prioridad cuando
`prefer_css_page_size` está activo, igual que un navegador que respeta el
tamaño CSS.
"""

import logging
from dataclasses import dataclass

from app.core.errors import DocumentComposeError

logger = logging.getLogger(__name__)

# Fondo transparente forzado cuando no se imprimen fondos
_NO_BACKGROUND_CSS = "*, html, body { background: transparent !important; }"


@dataclass(frozen=True)
class PageOptions:
    """Formato de página del documento."""

    format: str = "A4"
    landscape: bool = True
    print_background: bool = True
    prefer_css_page_size: bool = True


CERTIFICATE_PAGE = PageOptions()


def build_page_css(options: PageOptions) -> str:
    """Hoja de estilos de usuario con el tamaño de página pedido."""
    size = options.format.upper()
    if options.landscape:
        size = f"{size} landscape"
    # !important de usuario gana a la plantilla; sin él, gana la plantilla
    important = "" if options.prefer_css_page_size else " !important"

    css = f"@page {{ size: {size}{important}; }}"
    if not options.print_background:
        css = f"{css}\n{_NO_BACKGROUND_CSS}"
    return css


def _load_engine():
    # WeasyPrint needs pango at import time; load it only when composing
    from weasyprint import CSS, HTML

    return HTML, CSS


def compose(markup: str, options: PageOptions = CERTIFICATE_PAGE) -> bytes:
    """
    Compone el HTML en bytes PDF.

    Args:
        markup: HTML completo del certificado
        options: Formato de página

    Returns:
        Bytes del PDF

    Raises:
        DocumentComposeError: si el motor falla
    """
    html_cls, css_cls = _load_engine()

    try:
        pdf_bytes = html_cls(string=markup).write_pdf(
            stylesheets=[css_cls(string=build_page_css(options))]
        )
    except Exception as e:
        logger.error(f"Error composing certificate PDF: {e}")
        raise DocumentComposeError(f"Error composing PDF: {e}") from e

    logger.info(f"Composed PDF ({len(pdf_bytes)} bytes)")
    return pdf_bytes
