"""
Integration Services

This module contains the read contracts for the option providers consumed by
the group service, and their default SQL-backed implementations.
"""

from .option_providers import (
    OfficeOptionProvider,
    StaffOptionProvider,
    ClientOptionProvider,
    CenterOptionProvider,
    CodeValueProvider
)
from .sql_option_providers import (
    SqlOfficeOptionService,
    SqlStaffOptionService,
    SqlClientOptionService,
    SqlCenterOptionService,
    SqlCodeValueService
)

__all__ = [
    'OfficeOptionProvider',
    'StaffOptionProvider',
    'ClientOptionProvider',
    'CenterOptionProvider',
    'CodeValueProvider',
    'SqlOfficeOptionService',
    'SqlStaffOptionService',
    'SqlClientOptionService',
    'SqlCenterOptionService',
    'SqlCodeValueService'
]
