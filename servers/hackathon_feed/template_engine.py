"""Jinja2 template engine for consumer-facing messages."""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape


DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateEngine:
    """Render chat and report templates using Jinja2."""

    def __init__(self, template_dir: Path | None = None):
        """Initialize template engine with template directory.

        Args:
            template_dir: Path to templates directory.
                         Defaults to the package's templates/ folder.
        """
        self.template_dir = template_dir or DEFAULT_TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template with the given context.

        Raises:
            TemplateNotFound: If template doesn't exist
        """
        template = self.env.get_template(template_name)
        return template.render(**context)
