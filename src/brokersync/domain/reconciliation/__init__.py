"""Reconciliation core: broker registrations and access visibility.

``ReconciliationTask`` diffs the registry's desired brokers against the
platform's registrations; ``AccessVisibilityReconciler`` turns enable and
disable decisions into visibility mutations on the platform.
"""

from __future__ import annotations

from .access import AccessVisibilityReconciler
from .brokers import ReconciliationResult, ReconciliationSettings, ReconciliationTask
from .scope import parse_scope
from .tracking import RunTracker

__all__ = [
    "AccessVisibilityReconciler",
    "ReconciliationResult",
    "ReconciliationSettings",
    "ReconciliationTask",
    "RunTracker",
    "parse_scope",
]
