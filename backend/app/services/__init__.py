# Services package init
"""
Product Catalog API — Services Layer
======================================

Service Inventory:
    - ProductStore (product_store.py): Store Gateway over the Mongo products collection
    - Found / NotFound / StoreFailure (results.py): tagged outcomes of store calls
"""
