from __future__ import annotations

from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from app.api import house_label
from services.errors import UnknownHouseError
from services.house_session import HouseSession, build_default_session
from settings import get_settings


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def _long_date(value: date) -> str:
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def _signed(value: float) -> str:
    return f"{'+' if value > 0 else ''}{value:.2f}"


def _band_value(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


templates.env.filters["long_date"] = _long_date
templates.env.filters["signed"] = _signed
templates.env.filters["band_value"] = _band_value


def get_session(house_id: str) -> HouseSession:
    try:
        return build_default_session(house_id)
    except UnknownHouseError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


def _render(request: Request, session: HouseSession, status_code: int = 200) -> HTMLResponse:
    houses = [(house_id, house_label(house_id)) for house_id in get_settings().houses]
    return templates.TemplateResponse(
        request,
        "ui/house.html",
        {
            "houses": houses,
            "active_house": session.house_id,
            "form": session.form,
            "error": session.error,
            "comparison": session.comparison,
            "averages": session.averages,
            "readings": session.store.readings,
        },
        status_code=status_code,
    )


def _house_url(request: Request, house_id: str) -> str:
    return str(request.url_for("ui_house", house_id=house_id))


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index")
async def ui_index(request: Request) -> RedirectResponse:
    first_house = get_settings().houses[0]
    return RedirectResponse(_house_url(request, first_house), status_code=status.HTTP_303_SEE_OTHER)


@router.get("/ui/houses/{house_id}", name="ui_house", response_class=HTMLResponse)
async def ui_house(
    request: Request,
    session: HouseSession = Depends(get_session),
) -> HTMLResponse:
    return _render(request, session)


@router.post("/ui/houses/{house_id}/readings", name="ui_save_reading")
async def ui_save_reading(
    request: Request,
    session: HouseSession = Depends(get_session),
    reading_date: str = Form("", alias="date"),
    day: str = Form(""),
    evening: str = Form(""),
    night: str = Form(""),
    solar: str = Form(""),
) -> Response:
    if session.save_reading(reading_date, day, evening, night, solar):
        return RedirectResponse(
            _house_url(request, session.house_id), status_code=status.HTTP_303_SEE_OTHER
        )
    return _render(request, session, status_code=status.HTTP_400_BAD_REQUEST)


@router.post("/ui/houses/{house_id}/averages", name="ui_averages", response_class=HTMLResponse)
async def ui_averages(
    request: Request,
    session: HouseSession = Depends(get_session),
    target_date: str = Form("", alias="date"),
) -> HTMLResponse:
    session.compute_averages(target_date)
    return _render(request, session)


@router.post("/ui/houses/{house_id}/readings/{reading_id}/delete", name="ui_delete_reading")
async def ui_delete_reading(
    request: Request,
    reading_id: str,
    session: HouseSession = Depends(get_session),
    confirmed: bool = Form(False),
) -> RedirectResponse:
    session.delete_reading(reading_id, confirmed=confirmed)
    return RedirectResponse(
        _house_url(request, session.house_id), status_code=status.HTTP_303_SEE_OTHER
    )
