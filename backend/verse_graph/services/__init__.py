# Services package init
"""
Verse Graph API — Store Access Layer
======================================

What:  Single-collection CRUD between the routes (HTTP) and ArangoDB.

Service Inventory:
    - CollectionStore (abstract): six primitives, failures as tagged StoreError
    - ArangoCollectionStore: python-arango implementation
"""
