"""
Verse Graph API — Abstract Collection Store Interface
=======================================================

What:  Abstract base class defining the contract for single-collection CRUD.
How:   Concrete implementations inherit from CollectionStore and implement the
       six primitives. ArangoCollectionStore is the production implementation;
       tests provide an in-memory one.
Who:   Injected into the generic resource router at construction time.

Contract:
    - Records are plain dicts; store metadata lives under `_key`, `_id`, `_rev`
      (plus `_from`/`_to` on edge collections).
    - Every failure is raised as StoreError tagged with a StoreErrorKind.
      No implementation leaks driver-specific exceptions.
    - No method retries; each call maps to exactly one store round trip.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


Record = Dict[str, Any]


class CollectionStore(ABC):
    """
    CRUD access to one named collection.

    Attributes:
        name:  Collection name (e.g. "verse", "hasSource")
    """

    name: str

    @abstractmethod
    def all(self) -> List[Record]:
        """
        Return every record in the collection, in the store's iteration order.

        Raises:
            StoreError(OTHER): Any store failure.
        """
        ...

    @abstractmethod
    def insert(self, record: Record) -> Record:
        """
        Insert a new record.

        Args:
            record: Field values; may carry a client-chosen `_key`. Edge
                    records must carry `_from` and `_to`.

        Returns:
            Store metadata for the new record (`_key`, `_id`, `_rev`).

        Raises:
            StoreError(DUPLICATE): `_key` already taken.
            StoreError(OTHER):     Any other store failure.
        """
        ...

    @abstractmethod
    def get(self, key: str) -> Record:
        """
        Fetch a record by key.

        Raises:
            StoreError(NOT_FOUND): No record with this key.
        """
        ...

    @abstractmethod
    def replace(self, key: str, record: Record) -> Record:
        """
        Overwrite every non-system field of an existing record.

        If `record` carries `_rev`, the store rejects the write when it is no
        longer the current revision.

        Returns:
            Store metadata after the write (`_key`, `_id`, `_rev`, `_old_rev`).

        Raises:
            StoreError(NOT_FOUND): No record with this key.
            StoreError(CONFLICT):  Stale `_rev`.
        """
        ...

    @abstractmethod
    def update(self, key: str, patch: Record) -> Record:
        """
        Merge `patch` into an existing record (store-defined merge semantics).

        Returns:
            Store metadata after the write.

        Raises:
            StoreError(NOT_FOUND): No record with this key.
            StoreError(CONFLICT):  Stale `_rev`.
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove a record by key.

        Raises:
            StoreError(NOT_FOUND): No record with this key.
        """
        ...
