"""
Weekly Expense Review - Source Package

A personal expense ledger with a rolling Monday-to-Sunday weekly view.

DESIGN PRINCIPLES:
1. The ledger is the single source of truth
2. Weekly views are recomputed, never cached
3. Bad input is refused, never silently corrected
4. Storage failures never take the session down
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Weekly Expense Review Team"
