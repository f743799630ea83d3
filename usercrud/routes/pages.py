"""
UserCRUD - Static Page Routes
==============================

What:  GET / (landing page) and GET /create-a-db-record (empty form).
How:   Renders a template with no data; neither route touches the database.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from usercrud.services.view_renderer import ViewRenderer, get_view_renderer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse, summary="Landing page")
async def index(renderer: ViewRenderer = Depends(get_view_renderer)) -> HTMLResponse:
    logger.info("User requested root of web site.")
    return HTMLResponse(renderer.render("index.html"))


@router.get(
    "/create-a-db-record",
    response_class=HTMLResponse,
    summary="Form for creating a record",
)
async def create_form(renderer: ViewRenderer = Depends(get_view_renderer)) -> HTMLResponse:
    return HTMLResponse(renderer.render("create-a-record-in-database.html"))
