# Services package init
"""
Author API: Services Layer
============================

What:  Business logic between the routes (HTTP) and the repositories (SQL).

Service Inventory:
    - AuthorService: CRUD orchestration over an injected AuthorStore
"""
