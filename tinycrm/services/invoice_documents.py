"""
Invoice document rendering.

Templates are plain Jinja2 HTML files in ``<TEMPLATES_DIR>/invoices``. Each
one is rendered with a single ``invoice`` variable holding the fully loaded
aggregate, so templates can use the derived values directly, e.g.
``{{ invoice.identification }}`` or ``{{ invoice.total }}``.
"""

import logging
from pathlib import Path

from jinja2 import TemplateError, TemplateNotFound
from starlette.templating import Jinja2Templates

from tinycrm.exceptions import BadRequestError, NotFoundError, TemplateRenderError
from tinycrm.models import Invoice

logger = logging.getLogger(__name__)


class InvoiceDocumentRenderer:
    """Lists and renders the HTML templates available for invoices."""

    def __init__(self, templates_dir: Path):
        self.templates_dir = Path(templates_dir)
        self._templates = Jinja2Templates(directory=str(self.templates_dir))
        self._templates.env.filters["money"] = format_money

    def list_templates(self) -> list[str]:
        """Names of the files directly inside the templates directory."""
        if not self.templates_dir.is_dir():
            raise TemplateRenderError(f"Invoice templates directory {self.templates_dir} does not exist")
        return sorted(p.name for p in self.templates_dir.iterdir() if p.is_file())

    def render(self, invoice: Invoice, template_name: str) -> str:
        if not template_name:
            raise BadRequestError("template query parameter is required")
        if Path(template_name).name != template_name or template_name in (".", ".."):
            raise BadRequestError(f"Invalid template name: {template_name}")

        try:
            template = self._templates.get_template(template_name)
        except TemplateNotFound:
            raise NotFoundError("Template", template_name)

        try:
            return template.render(invoice=invoice)
        except TemplateError as e:
            logger.error("Error rendering template %s: %s", template_name, e)
            raise TemplateRenderError(f"Could not render template {template_name}: {e}") from e


def format_money(value) -> str:
    """``1234.5`` -> ``1,234.50``."""
    return f"{value:,.2f}"
