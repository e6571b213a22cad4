# Routes package init
"""
Verse Graph API — API Routes Package
======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - resource.py:  /verse, /source, /hasSource   (generic CRUD router,
                    instantiated once per resource definition)
    - health.py:    GET /health                   (service health check)

Routes stay thin: they extract path/body data, call one CollectionStore
primitive, and translate tagged store errors into HTTP errors.
"""
