from pathlib import Path

from fastapi.templating import Jinja2Templates

from menudujour.services.rendering import MenuView

BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

PRINT_TEMPLATE = "menu/print.html"
SCREEN_TEMPLATE = "menu/public.html"


def render_print_document(view: MenuView) -> str:
    """Full static A4 document: what `?print=1` serves and what the PDF rasterizes."""
    return templates.get_template(PRINT_TEMPLATE).render(view=view, mode="print")
