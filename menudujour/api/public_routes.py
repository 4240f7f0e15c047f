from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from menudujour.db import get_db
from menudujour.services import pdf_renderer
from menudujour.services.html_renderer import SCREEN_TEMPLATE, render_print_document, templates
from menudujour.services.public_menu import load_public_menu
from menudujour.utils.dates import relative_date_label, today_local
from menudujour.utils.responses import error_json, status_for

router = APIRouter()

NOT_FOUND_TEMPLATE = "menu/not_found.html"
MENU_NOT_FOUND = "Menu not found"


def _links(slug: str, date: Optional[str]):
    params = {"date": date} if date else {}
    print_url = f"/menu/{slug}?" + urlencode({**params, "print": 1})
    pdf_url = "/api/menu/pdf?" + urlencode({"slug": slug, **params})
    return print_url, pdf_url


# 🍽️ Public menu page (screen or print)
@router.get("/menu/{slug}", response_class=HTMLResponse)
async def public_menu_page(
    request: Request,
    slug: str,
    date: Optional[str] = Query(None),
    print_mode: int = Query(0, alias="print"),
    prices: bool = Query(True),
    db: AsyncSession = Depends(get_db),
):
    result = await load_public_menu(db, slug, date, page_show_prices=prices)
    if not result.ok:
        return templates.TemplateResponse(
            request,
            NOT_FOUND_TEMPLATE,
            {"message": result.error},
            status_code=status_for(result),
        )

    public = result.data
    if print_mode == 1 and public.has_items:
        return HTMLResponse(render_print_document(public.view))

    today = today_local()
    print_url, pdf_url = _links(slug, date)
    return templates.TemplateResponse(
        request,
        SCREEN_TEMPLATE,
        {
            "view": public.view,
            "restaurant": public.restaurant,
            "preview": public.preview,
            "date_label": public.date_label,
            "is_today": public.menu_date == today,
            "relative_label": relative_date_label(public.menu_date, today),
            "print_url": print_url,
            "pdf_url": pdf_url,
            "mode": "screen",
        },
    )


# 📄 PDF export
@router.get("/api/menu/pdf")
async def public_menu_pdf(
    slug: str = Query(...),
    date: Optional[str] = Query(None),
    prices: bool = Query(True),
    db: AsyncSession = Depends(get_db),
):
    result = await load_public_menu(db, slug, date, page_show_prices=prices)
    if not result.ok:
        return error_json(status_for(result), result.error)

    public = result.data
    if not public.has_items:
        return error_json(404, MENU_NOT_FOUND)

    pdf = await pdf_renderer.generate_menu_pdf(public.view)
    if not pdf.ok:
        return error_json(status_for(pdf), pdf.error)

    filename = f"menu-{public.restaurant.slug}-{public.menu_date.strftime('%Y%m%d')}.pdf"
    return Response(
        content=pdf.data,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "no-store",
        },
    )
