"""Domain layer for bizledger application."""

from bizledger.domain.transaction import TransactionService
from bizledger.domain.invoice import InvoiceService
from bizledger.domain.master import MasterDataService
from bizledger.domain.reports import ReportService
from bizledger.domain.reconciler import InvoiceReconciler, ReconcilePolicy

__all__ = [
    "TransactionService",
    "InvoiceService",
    "MasterDataService",
    "ReportService",
    "InvoiceReconciler",
    "ReconcilePolicy",
]
