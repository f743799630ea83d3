"""
UserCRUD - View Renderer
=========================

What:  Renders the Jinja2 templates under usercrud/templates into HTML strings.
How:   A single Environment with autoescaping enabled for every template and
       StrictUndefined, so a context that lacks a variable the template uses
       fails loudly instead of rendering blanks.
Who:   Injected into route handlers through `get_view_renderer`.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound

from usercrud.exceptions import TemplateRenderError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class ViewRenderer:
    """Renders named templates with a data context."""

    def __init__(self, directory: Path = TEMPLATES_DIR):
        self.directory = Path(directory)
        self.env = Environment(
            loader=FileSystemLoader(str(self.directory)),
            autoescape=True,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render `template_name` with `context` and return the HTML.

        Raises:
            TemplateRenderError: Template missing, invalid, or the context does
                not match what the template expects.
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**dict(context or {}))
        except TemplateNotFound as e:
            logger.error("Template not found: %s", template_name)
            raise TemplateRenderError(
                template_name,
                message=f"Template '{template_name}' does not exist.",
            ) from e
        except TemplateError as e:
            logger.error("Failed to render %s: %s", template_name, str(e))
            raise TemplateRenderError(
                template_name,
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e


view_renderer = ViewRenderer()


def get_view_renderer() -> ViewRenderer:
    """FastAPI dependency returning the shared renderer."""
    return view_renderer
