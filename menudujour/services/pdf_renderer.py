"""
PDF export through headless Chromium (Playwright).

The print document is rendered to a static HTML string, loaded into a fresh
browser page and printed to a single A4 page. One browser per request; no
pooling. Any failure to locate, launch or drive the browser is reported as a
RENDER error, and a response that is not a PDF is never handed back.
"""
import asyncio
import logging
import os
from typing import Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from menudujour.core.config import get_settings
from menudujour.core.results import ErrorKind, RENDER_ERROR, Result
from menudujour.services.html_renderer import render_print_document
from menudujour.services.rendering import MenuView

log = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
BROWSER_ARGS = ["--no-sandbox", "--disable-dev-shm-usage"]


class RenderError(Exception):
    """Raised inside the adapter; surfaced to callers as a RENDER result."""


async def print_html_to_pdf(html: str, executable_path: Optional[str] = None) -> bytes:
    if executable_path and not os.path.exists(executable_path):
        raise RenderError(f"Chromium not found at {executable_path}")

    async with async_playwright() as p:
        browser = await p.chromium.launch(
            executable_path=executable_path or None,
            args=BROWSER_ARGS,
            headless=True,
        )
        try:
            page = await browser.new_page(viewport={"width": 1200, "height": 800})
            await page.set_content(html, wait_until="networkidle")
            return await page.pdf(
                format="A4",
                print_background=True,
                margin={"top": "0", "right": "0", "bottom": "0", "left": "0"},
                page_ranges="1",
            )
        finally:
            await browser.close()


PdfPrinter = Callable[[str, Optional[str]], Awaitable[bytes]]


async def generate_menu_pdf(view: MenuView, printer: Optional[PdfPrinter] = None) -> Result[bytes]:
    settings = get_settings()
    printer = printer or print_html_to_pdf
    html = render_print_document(view)

    try:
        pdf = await asyncio.wait_for(
            printer(html, settings.chrome_path),
            timeout=settings.pdf_timeout_seconds,
        )
        if not pdf or not pdf.startswith(PDF_MAGIC):
            raise RenderError("Browser returned an empty or non-PDF document")
    except asyncio.TimeoutError:
        log.error("PDF rendering exceeded %ss for %s", settings.pdf_timeout_seconds, view.title)
        return Result.fail(ErrorKind.RENDER, RENDER_ERROR)
    except (PlaywrightError, RenderError, OSError):
        log.exception("PDF rendering failed for %s", view.title)
        return Result.fail(ErrorKind.RENDER, RENDER_ERROR)

    log.info("Rendered PDF for %s (%d bytes)", view.title, len(pdf))
    return Result.success(pdf)
