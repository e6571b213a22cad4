"""
Verse Graph API — ArangoDB Collection Store
=============================================

What:  CollectionStore implementation backed by python-arango.
How:   Each primitive calls exactly one python-arango collection method and
       converts driver exceptions into StoreError tags using ArangoDB error
       numbers (arango.errno).
Who:   Built by the application factory, one per resource collection.

Error Translation:
    ArangoDB errorNum                          → StoreErrorKind
    1202 ERROR_ARANGO_DOCUMENT_NOT_FOUND       → NOT_FOUND
    1210 ERROR_ARANGO_UNIQUE_CONSTRAINT_VIOLATED → DUPLICATE
    1200 ERROR_ARANGO_CONFLICT                 → CONFLICT
    anything else                              → OTHER

    `collection.get()` returns None for a missing key instead of raising, so
    that case is tagged NOT_FOUND here with ArangoDB's own message.
"""

import logging
from typing import Any, List, Optional

from arango import errno
from arango.database import StandardDatabase
from arango.exceptions import ArangoError

from verse_graph.exceptions import StoreError, StoreErrorKind
from verse_graph.services.store_base import CollectionStore, Record

logger = logging.getLogger(__name__)

DOCUMENT_NOT_FOUND_MESSAGE = "document not found"

_KIND_BY_ERRNO = {
    errno.DOCUMENT_NOT_FOUND: StoreErrorKind.NOT_FOUND,
    errno.UNIQUE_CONSTRAINT_VIOLATED: StoreErrorKind.DUPLICATE,
    errno.CONFLICT: StoreErrorKind.CONFLICT,
}


def to_store_error(exc: ArangoError) -> StoreError:
    """
    Convert a python-arango exception into a tagged StoreError.

    The message is ArangoDB's `errorMessage` verbatim when the server sent
    one, otherwise the driver's own text.
    """
    error_code: Optional[int] = getattr(exc, "error_code", None)
    message = getattr(exc, "error_message", None) or str(exc)
    kind = _KIND_BY_ERRNO.get(error_code, StoreErrorKind.OTHER)
    return StoreError(
        kind=kind,
        message=message,
        error_code=error_code,
        context={"http_code": getattr(exc, "http_code", None)},
    )


def _addressed(record: Record, key: str) -> Record:
    # python-arango resolves the target from `_id` before `_key`; the path key wins.
    body = {k: v for k, v in record.items() if k != "_id"}
    body["_key"] = key
    return body


class ArangoCollectionStore(CollectionStore):
    """
    CRUD access to one ArangoDB collection (document or edge).

    The database handle is shared; python-arango opens a fresh HTTP request
    per call, so one instance serves concurrent requests.
    """

    def __init__(self, database: StandardDatabase, name: str):
        self.name = name
        self._collection = database.collection(name)

    def all(self) -> List[Record]:
        try:
            return list(self._collection.all())
        except ArangoError as e:
            raise to_store_error(e) from e

    def insert(self, record: Record) -> Record:
        try:
            # A body `_id` would address the document; the store assigns it.
            return self._collection.insert({k: v for k, v in record.items() if k != "_id"})
        except ArangoError as e:
            raise to_store_error(e) from e

    def get(self, key: str) -> Record:
        try:
            document: Optional[Any] = self._collection.get(key)
        except ArangoError as e:
            raise to_store_error(e) from e
        if document is None:
            raise StoreError(
                kind=StoreErrorKind.NOT_FOUND,
                message=DOCUMENT_NOT_FOUND_MESSAGE,
                error_code=errno.DOCUMENT_NOT_FOUND,
                context={"collection": self.name, "key": key},
            )
        return document

    def replace(self, key: str, record: Record) -> Record:
        try:
            return self._collection.replace(_addressed(record, key), check_rev=True)
        except ArangoError as e:
            raise to_store_error(e) from e

    def update(self, key: str, patch: Record) -> Record:
        try:
            return self._collection.update(_addressed(patch, key), check_rev=True)
        except ArangoError as e:
            raise to_store_error(e) from e

    def delete(self, key: str) -> None:
        try:
            self._collection.delete(key, ignore_missing=False)
        except ArangoError as e:
            raise to_store_error(e) from e
