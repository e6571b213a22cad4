"""
Verse Graph API — Generic CRUD Resource Router
================================================

What:  Builds the six routes of one resource (list, create, read, replace,
       update, delete) over an injected CollectionStore.
How:   create_resource_router(definition, store) returns an APIRouter mounted
       at /{collection}. Handlers are plain `def` endpoints (FastAPI runs them
       in its threadpool) because python-arango calls block.
Who:   The application factory calls it once per ResourceDefinition.

Route Inventory (per resource):
    GET    /{resource}          list     → 200 [records]
    POST   /{resource}          create   → 201 record + Location   | 409
    GET    /{resource}/{key}    detail   → 200 record              | 404
    PUT    /{resource}/{key}    replace  → 200 record              | 404, 409
    PATCH  /{resource}/{key}    update   → 200 record              | 404, 409
    DELETE /{resource}/{key}    delete   → 204                     | 404

Error Translation:
    Each operation catches only the StoreError kinds it declares and turns
    them into NotFoundError (404) or ConflictError (409), carrying the store
    message verbatim. Every other StoreError is re-raised unchanged and ends
    in the catch-all 500 handler.
"""

import logging
from typing import Any, Dict, FrozenSet, List, NoReturn, Optional

from fastapi import APIRouter, Body, Path, Request, Response

from verse_graph.exceptions import ConflictError, NotFoundError, StoreError, StoreErrorKind
from verse_graph.resources import ResourceDefinition
from verse_graph.schemas.record import ErrorResponse
from verse_graph.services.store_base import CollectionStore, Record

logger = logging.getLogger(__name__)

_HTTP_ERRORS = {
    StoreErrorKind.NOT_FOUND: NotFoundError,
    StoreErrorKind.DUPLICATE: ConflictError,
    StoreErrorKind.CONFLICT: ConflictError,
}

NOT_FOUND_ONLY = frozenset({StoreErrorKind.NOT_FOUND})
DUPLICATE_ONLY = frozenset({StoreErrorKind.DUPLICATE})
NOT_FOUND_OR_CONFLICT = frozenset({StoreErrorKind.NOT_FOUND, StoreErrorKind.CONFLICT})


def translate_store_error(
    error: StoreError,
    handled: FrozenSet[StoreErrorKind],
    resource: ResourceDefinition,
    key: Optional[str] = None,
) -> NoReturn:
    """
    Raise the HTTP-facing exception for `error` if its kind is in `handled`,
    otherwise re-raise `error` itself.
    """
    if error.kind in handled:
        raise _HTTP_ERRORS[error.kind](
            message=error.message,
            resource=resource.collection,
            resource_id=key,
            context={"error_code": error.error_code},
        ) from error
    raise error


def create_resource_router(resource: ResourceDefinition, store: CollectionStore) -> APIRouter:
    """
    Assemble the CRUD router for one resource.

    Args:
        resource: What to expose (collection, wording, schemas)
        store:    Store bound to the resource's collection

    Returns:
        APIRouter with routes named `<collection>_list`, `_create`, `_detail`,
        `_replace`, `_update`, `_delete`.
    """
    router = APIRouter(prefix=resource.prefix, tags=[resource.label])
    label = resource.label
    body_model = resource.body_model
    response_model = resource.response_model

    not_found = {"description": f"The {label} does not exist.", "model": ErrorResponse}
    conflict = {"description": f"The {label} conflicts with its current state.", "model": ErrorResponse}

    @router.get(
        "",
        response_model=List[response_model],
        name=resource.route_name("list"),
        summary=f"List all {resource.plural}",
        description=f"Retrieves a list of all {resource.plural}.",
    )
    def list_records() -> List[Record]:
        return store.all()

    @router.post(
        "",
        status_code=201,
        response_model=response_model,
        responses={409: {"description": f"The {label} already exists.", "model": ErrorResponse}},
        name=resource.route_name("create"),
        summary=f"Create a new {label}",
        description=f"Creates a new {label} from the request body and returns the saved document.",
    )
    def create_record(
        request: Request,
        response: Response,
        body: body_model = Body(..., description=f"The {label} to create."),
    ) -> Record:
        record = body.to_record()
        try:
            meta = store.insert(record)
        except StoreError as e:
            translate_store_error(e, DUPLICATE_ONLY, resource, record.get("_key"))
        record.update(meta)
        response.headers["Location"] = str(
            request.url_for(resource.route_name("detail"), key=record["_key"])
        )
        logger.info("Created %s", record["_id"])
        return record

    @router.get(
        "/{key}",
        response_model=response_model,
        responses={404: not_found},
        name=resource.route_name("detail"),
        summary=f"Fetch a {label}",
        description=f"Retrieves a {label} by its key.",
    )
    def read_record(
        key: str = Path(..., min_length=1, description=f"The key of the {label}"),
    ) -> Record:
        try:
            return store.get(key)
        except StoreError as e:
            translate_store_error(e, NOT_FOUND_ONLY, resource, key)

    @router.put(
        "/{key}",
        response_model=response_model,
        responses={404: not_found, 409: conflict},
        name=resource.route_name("replace"),
        summary=f"Replace a {label}",
        description=f"Replaces an existing {label} with the request body and returns the new document.",
    )
    def replace_record(
        key: str = Path(..., min_length=1, description=f"The key of the {label}"),
        body: body_model = Body(..., description=f"The data to replace the {label} with."),
    ) -> Record:
        record = body.to_record()
        try:
            meta = store.replace(key, record)
        except StoreError as e:
            translate_store_error(e, NOT_FOUND_OR_CONFLICT, resource, key)
        record.update(meta)
        return record

    @router.patch(
        "/{key}",
        response_model=response_model,
        responses={404: not_found, 409: conflict},
        name=resource.route_name("update"),
        summary=f"Update a {label}",
        description=f"Patches a {label} with the request body and returns the updated document.",
    )
    def update_record(
        key: str = Path(..., min_length=1, description=f"The key of the {label}"),
        patch: Dict[str, Any] = Body(..., description=f"The data to update the {label} with."),
    ) -> Record:
        # Merge first, then read back the full record.
        try:
            store.update(key, patch)
            return store.get(key)
        except StoreError as e:
            translate_store_error(e, NOT_FOUND_OR_CONFLICT, resource, key)

    @router.delete(
        "/{key}",
        status_code=204,
        response_class=Response,
        responses={404: not_found},
        name=resource.route_name("delete"),
        summary=f"Remove a {label}",
        description=f"Deletes a {label} from the database.",
    )
    def delete_record(
        key: str = Path(..., min_length=1, description=f"The key of the {label}"),
    ) -> Response:
        try:
            store.delete(key)
        except StoreError as e:
            translate_store_error(e, NOT_FOUND_ONLY, resource, key)
        logger.info("Removed %s/%s", resource.collection, key)
        return Response(status_code=204)

    return router
