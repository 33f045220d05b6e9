# Repositories package init
"""
Author API: Storage Access Layer
==================================

Repository Inventory:
    - author_repository.py: AuthorStore protocol, storage commands,
                            and the SQLAlchemy AuthorRepository
"""
