"""
Domain Services

This module contains the business logic for reading group data.

Available Domain Services:
=========================

1. **GroupReadService** - Hierarchy-scoped group template, listing, retrieval and lookup

Supporting pieces:
- **GroupPredicateBuilder** - Search parameters to bound SQL predicates
- **SearchExpressionParser** - Free-text search fragments to SQL expressions
- **GroupTemplateAssembler** - Option lists for new groups
"""

from .group_service import GroupReadService, GroupNotFoundError
from .group_queries import GroupPredicateBuilder, GroupPredicates
from .search_parser import SearchExpressionParser
from .template_assembler import GroupTemplateAssembler

__all__ = [
    'GroupReadService',
    'GroupNotFoundError',
    'GroupPredicateBuilder',
    'GroupPredicates',
    'SearchExpressionParser',
    'GroupTemplateAssembler'
]
