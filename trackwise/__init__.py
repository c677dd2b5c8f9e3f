"""
Trackwise - Source Package

A personal and household finance tracker: expenses, categories,
budget goals, household members and their contributions.

DESIGN PRINCIPLES:
1. One explicitly constructed AppState owns all data
2. Derived values are computed at read time, never trusted from storage
3. Storage is best-effort and never crashes the app
4. AI suggests, the user decides
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Trackwise Team"
