"""
Service Layer

This module provides the read-side business logic for groups. It sits between
whatever transport exposes it and the SQLAlchemy models.

Architecture:
============

1. **Base Services** (base.py):
   - Abstract base class and dependency registration
   - Error taxonomy and logging decorator

2. **Domain Services** (domain/):
   - Group template, listing, retrieval and lookup
   - Predicate construction and free-text search parsing

3. **Integration Services** (integration/):
   - Read contracts for office, staff, client, center and code-value options
   - Default SQL-backed providers

Usage Example:
=============

```python
from groupread.core.database import SessionLocal
from groupread.core.dependencies import build_group_read_service, resolve_caller_context
from groupread.schemas import SearchParameters

db = SessionLocal()
service = build_group_read_service(db)
caller = resolve_caller_context(db, office_id=1)

page = service.retrieve_all(caller, SearchParameters(name="West", limit=20))
group = service.retrieve_one(caller, page.items[0].id)
```
"""

from .base import BaseService, ServiceError, ValidationError, NotFoundError
from .domain import *

__all__ = [
    'BaseService',
    'ServiceError',
    'ValidationError',
    'NotFoundError'
]
