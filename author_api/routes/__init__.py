# Routes package init
"""
Author API: API Routes Package
================================

Route Inventory:
    - authors.py: POST/GET/PUT/PATCH/DELETE /authors and /authors/{id}
    - health.py:  GET /health (service health check)

Routes handle HTTP concerns only (binding, status codes). Storage and
error translation belong to AuthorService.
"""
