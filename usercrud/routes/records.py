"""
UserCRUD - Record Route Handlers
=================================

What:  The read, create, update and delete routes for the `users` collection.
How:   Each GET lists the records and renders a view; each POST validates the
       body against its schema once, calls the record store, and redirects to
       the listing page. Errors are raised, never answered here: the handlers
       in main.py map them to status codes for every route the same way.

Route Inventory:
    GET  /read-a-db-record      table of all records
    POST /create-a-db-record    insert (name, email, phone)
    GET  /update-a-db-record    edit forms, one per record
    POST /update-a-db-record    update by id (id, name, email, phone)
    GET  /delete-a-db-record    delete form
    POST /delete-a-db-record    delete first record with the given name

Successful POSTs answer 303 See Other so the browser follows with a GET.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from usercrud.database import get_record_store
from usercrud.exceptions import NotFoundError
from usercrud.routes.forms import read_body
from usercrud.schemas.record import RecordDelete, RecordFields, RecordUpdate, parse_request
from usercrud.services.record_store import RecordStore
from usercrud.services.view_renderer import ViewRenderer, get_view_renderer

logger = logging.getLogger(__name__)

READ_PATH = "/read-a-db-record"

router = APIRouter(tags=["Records"])


def _redirect_to_listing() -> RedirectResponse:
    return RedirectResponse(url=READ_PATH, status_code=303)


@router.get(READ_PATH, response_class=HTMLResponse, summary="List all records")
async def read_records(
    request: Request,
    store: RecordStore = Depends(get_record_store),
    renderer: ViewRenderer = Depends(get_view_renderer),
) -> HTMLResponse:
    records = await store.list_all()
    logger.info("User requested %s (%d records).", request.url.path, len(records))
    return HTMLResponse(renderer.render("read-from-database.html", {"records": records}))


@router.post("/create-a-db-record", summary="Insert a record from the create form")
async def create_record(
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> RedirectResponse:
    fields = parse_request(RecordFields, await read_body(request))
    record_id = await store.insert(fields.to_document())
    logger.info("Inserted one record into Mongo via an HTML form using POST: %s", record_id)
    return _redirect_to_listing()


@router.get("/update-a-db-record", response_class=HTMLResponse, summary="Edit forms for all records")
async def update_form(
    request: Request,
    store: RecordStore = Depends(get_record_store),
    renderer: ViewRenderer = Depends(get_view_renderer),
) -> HTMLResponse:
    records = await store.list_all()
    logger.info("User requested the resource %s", request.url.path)
    return HTMLResponse(renderer.render("update-a-record-in-database.html", {"records": records}))


@router.post("/update-a-db-record", summary="Update a record by id")
async def update_record(
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> RedirectResponse:
    """
    Replace name, email and phone of the record with the submitted id.

    Responses:
        303  updated, redirect to the listing
        400  a field is missing or empty, or the id is malformed
        404  no record has that id
    """
    update = parse_request(RecordUpdate, await read_body(request))

    matched = await store.update_by_id(update.id, update.to_document())
    if matched == 0:
        logger.info("No record found with _id: %s", update.id)
        raise NotFoundError(message="Record not found.", context={"record_id": update.id})

    logger.info("Successfully updated record with _id: %s", update.id)
    return _redirect_to_listing()


@router.get("/delete-a-db-record", response_class=HTMLResponse, summary="Delete form")
async def delete_form(
    store: RecordStore = Depends(get_record_store),
    renderer: ViewRenderer = Depends(get_view_renderer),
) -> HTMLResponse:
    records = await store.list_all()
    return HTMLResponse(renderer.render("delete-a-record-in-database.html", {"records": records}))


@router.post("/delete-a-db-record", summary="Delete the first record with a given name")
async def delete_record(
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> RedirectResponse:
    """
    Delete one record whose name equals the submitted name.

    Only the first match in store order is removed; other records sharing the
    name are left in place.
    """
    target = parse_request(RecordDelete, await read_body(request))

    deleted = await store.delete_by_field("name", target.name)
    if deleted == 0:
        raise NotFoundError(message="No record found to delete.", context={"name": target.name})

    logger.info("Successfully deleted the record named %r.", target.name)
    return _redirect_to_listing()
