"""
Verse Graph API — Application Package Initializer
==================================================

What:  Marks the `verse_graph` directory as a Python package.
Who:   Imported by uvicorn (`uvicorn verse_graph.main:app`), pytest, and the
       provisioning CLI (`python -m verse_graph.provisioning`).

Architecture Note:
    The service is a thin REST facade over three ArangoDB collections:

    ┌─────────────────────────────────────┐
    │     Routes (generic CRUD router)    │  ← HTTP concerns, error → status
    ├─────────────────────────────────────┤
    │   Store access (CollectionStore)    │  ← python-arango, tagged errors
    ├─────────────────────────────────────┤
    │      Database (ArangoDB handle)     │  ← connection from settings
    └─────────────────────────────────────┘

    Collections:
        verse      (document)
        source     (document)
        hasSource  (edge: source ← verse relationships)
"""

__version__ = "1.0.0"
