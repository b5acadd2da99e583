"""
billing_services -- orchestration over the pure billing engines.

The only layer that reads the wall clock. Dependency direction:

    billing_services/ -> billing_engines/, billing_kernel/, billing_config/  (allowed)
    billing_engines/  -> billing_services/, billing_config/                  (FORBIDDEN)
    billing_kernel/   -> any other billing package                           (FORBIDDEN)
"""

from billing_services.receivables_report_service import (
    ReceivablesReport,
    ReceivablesReportService,
    configure_service_logging,
)

__all__ = [
    "ReceivablesReport",
    "ReceivablesReportService",
    "configure_service_logging",
]
