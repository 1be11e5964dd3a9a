"""
Product Catalog API — Application Package Initializer
=======================================================

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, JSON bodies
    ├─────────────────────────────────────┤
    │     ProductStore (Store Gateway)    │  ← one Mongo call per operation
    ├─────────────────────────────────────┤
    │        Database (Motor client)      │  ← connection lifecycle
    └─────────────────────────────────────┘

    The store is injected into the routes when the app is built, so each
    layer can be tested on its own.
"""

__version__ = "1.0.0"
