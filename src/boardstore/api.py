"""
HTTP surface: one route per service endpoint.

Queries map to ``GET``; mutations to ``POST`` / ``PUT`` / ``DELETE``.
A successful ``Result`` is returned as its camelCase JSON value, a failed one
as ``{"kind": ..., "message": ...}`` with a status code per error kind.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from .core.result import (
    InvalidPayloadError,
    NotFoundError,
    Result,
    StorageFailureError,
    dump_value,
)
from .services.endpoints import list_endpoints
from .services.listings import ListingService
from .services.messages import MessageService

LOGGER = logging.getLogger(__name__)

STATUS_CODES = {
    NotFoundError.kind: 404,
    InvalidPayloadError.kind: 422,
    StorageFailureError.kind: 503,
}


def respond(result: Result) -> JSONResponse:
    if result.is_ok:
        return JSONResponse(content=dump_value(result.value))
    error = result.error
    return JSONResponse(
        status_code=STATUS_CODES.get(error.kind, 500), content=error.to_dict()
    )


def create_router(listings: ListingService, messages: MessageService) -> APIRouter:
    router = APIRouter()
    for prefix, service in (("listings", listings), ("messages", messages)):
        for name, kind in sorted(list_endpoints(service).items()):
            LOGGER.info("Adding %s %s.%s", kind, prefix, name)

    # ---- listed tokens --------------------------------------------------
    @router.get("/listings")
    def get_listed_tokens():
        return respond(listings.list_all())

    @router.get("/listings/{record_id}")
    def get_listed_token(record_id: str):
        return respond(listings.get_one(record_id))

    @router.get("/listings/{record_id}/status")
    def get_listed_token_status(record_id: str):
        return respond(listings.get_status(record_id))

    @router.get("/listings/{record_id}/pinata-url")
    def get_listed_token_pinata_url(record_id: str):
        return respond(listings.get_pinata_url(record_id))

    @router.post("/listings")
    def add_listed_token(payload: Dict[str, Any] = Body(...)):
        return respond(listings.add(payload))

    @router.put("/listings/{record_id}")
    def update_listed_token(record_id: str, payload: Dict[str, Any] = Body(...)):
        return respond(listings.update(record_id, payload))

    @router.post("/listings/{record_id}/unlist")
    def unlist_token(record_id: str):
        return respond(listings.unlist(record_id))

    @router.delete("/listings/{record_id}")
    def delete_listed_token(record_id: str):
        return respond(listings.delete(record_id))

    # ---- messages -------------------------------------------------------
    @router.get("/messages")
    def get_messages():
        return respond(messages.list_all())

    @router.get("/messages/{record_id}")
    def get_message(record_id: str):
        return respond(messages.get_one(record_id))

    @router.get("/messages/{record_id}/attachment-url")
    def get_message_attachment_url(record_id: str):
        return respond(messages.get_attachment_url(record_id))

    @router.post("/messages")
    def add_message(payload: Dict[str, Any] = Body(...)):
        return respond(messages.add(payload))

    @router.put("/messages/{record_id}")
    def update_message(record_id: str, payload: Dict[str, Any] = Body(...)):
        return respond(messages.update(record_id, payload))

    @router.delete("/messages/{record_id}")
    def delete_message(record_id: str):
        return respond(messages.delete(record_id))

    return router
