"""Services for reports: reconciliation, projection, filters and daily activity."""

from .exceptions import (
    ReportsServiceError,
    MissingLinkageError,
)
from .snapshot import RegistrationSnapshot
from .reconciliation import (
    summarize,
    combine,
    empty_summary,
    build_registration_details,
    summarize_details,
)
from .export import (
    EXPORT_COLUMNS,
    project,
    project_details,
    detail_to_row,
    render_csv,
    export_filename,
)
from .filters import filter_registrations
from .daily import get_daily_activities
from .queries import ReportQueries

__all__ = [
    # Exceptions
    'ReportsServiceError',
    'MissingLinkageError',
    # Data loading
    'RegistrationSnapshot',
    # Aggregate Reconciler
    'summarize',
    'combine',
    'empty_summary',
    'build_registration_details',
    'summarize_details',
    # Report/Export Projection
    'EXPORT_COLUMNS',
    'project',
    'project_details',
    'detail_to_row',
    'render_csv',
    'export_filename',
    # Filters and daily board
    'filter_registrations',
    'get_daily_activities',
    'ReportQueries',
]
