# Routes package init
"""
Product Catalog API — API Routes Package
==========================================

Route Inventory:
    - products.py: GET/POST {prefix}, GET/PUT/DELETE {prefix}/{id}
    - health.py:   GET /health, GET /

Routes are thin: each product handler calls one ProductStore operation and
maps the result to a response. No business logic lives here.
"""
