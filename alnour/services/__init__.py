"""
Module des services de la console Al Nour.
Contient le client de l'API REST et la logique métier des vues d'audit.
"""

from .api_client import AlNourAPIClient, AlNourAPIError, filters_to_params
from .reference_data import ReferenceDataCache
from .grouping import OperationGrouper, group_operations, compute_stats
from .report_service import generate_operations_report, format_euros
from .dashboard import build_dashboard

__all__ = [
    "AlNourAPIClient",
    "AlNourAPIError",
    "filters_to_params",
    "ReferenceDataCache",
    "OperationGrouper",
    "group_operations",
    "compute_stats",
    "generate_operations_report",
    "format_euros",
    "build_dashboard",
]
