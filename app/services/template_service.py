"""
Template rendering for certificate markup (Jinja2).

The engine is treated as a pure function: template text + data -> HTML.
"""

from dataclasses import asdict
from functools import lru_cache
from typing import Any, Callable, Dict

from jinja2 import Environment, StrictUndefined, TemplateError, select_autoescape

from app.core.errors import TemplateRenderError
from app.schemas.certificate import CertificateDocument
from app.services.assets import load_certificate_template

# Autoescape on: recipient names are free text
jinja_env = Environment(
    autoescape=select_autoescape(default_for_string=True, default=True),
    undefined=StrictUndefined,
)


def compile_template(template_text: str) -> Callable[[Dict[str, Any]], str]:
    """Compile template text into a callable `data -> markup`."""
    try:
        template = jinja_env.from_string(template_text)
    except TemplateError as e:
        raise TemplateRenderError(f"Invalid template: {e}") from e

    def _render(data: Dict[str, Any]) -> str:
        try:
            return template.render(**data)
        except TemplateError as e:
            raise TemplateRenderError(f"Error rendering template: {e}") from e

    return _render


def render(template_text: str, data: Dict[str, Any]) -> str:
    """Render template text with data."""
    return compile_template(template_text)(data)


@lru_cache(maxsize=1)
def _certificate_template() -> Callable[[Dict[str, Any]], str]:
    return compile_template(load_certificate_template())


def render_certificate(document: CertificateDocument) -> str:
    """Render the fixed certificate template for a document."""
    return _certificate_template()(asdict(document))
