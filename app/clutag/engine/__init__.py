"""Tag propagation engine.

This module provides reconciliation against the live tree, progress
statistics, candidate selection and the review state machine.
"""

from clutag.engine.reconcile import ReconcileReport, Reconciler
from clutag.engine.review import Decision, ReviewSession, ReviewStep
from clutag.engine.selector import pick_next, pick_random
from clutag.engine.stats import SubtreeStats, missing_ratio, subtree_stats, top_level_stats

__all__ = [
    "Decision",
    "ReconcileReport",
    "Reconciler",
    "ReviewSession",
    "ReviewStep",
    "SubtreeStats",
    "missing_ratio",
    "pick_next",
    "pick_random",
    "subtree_stats",
    "top_level_stats",
]
