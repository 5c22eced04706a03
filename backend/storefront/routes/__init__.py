# Routes package init
"""
Storefront Backend: API Routes Package
=======================================

Route Inventory:
    - catalog.py: GET /product/{productId}, GET /randomproduct,
                  GET /products, GET /categories
    - orders.py:  GET /allorders, GET /orders?id=, GET /order/{id},
                  POST /orders, DELETE /order/{id}
    - users.py:   GET /user/{id}, GET /users, PATCH /user/{id}
    - health.py:  GET /, GET /health

Routes are THIN: pull identifiers out of the request, call the persistence
gateway, turn None into NotFoundError. DatabaseError is left to the global
exception handler.
"""
