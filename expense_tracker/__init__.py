"""
Expense Tracker - Source Package

A single-user personal expense tracker: record spending, summarize it,
chart it and export it.

DESIGN PRINCIPLES:
1. Engine functions are pure over a snapshot of the records
2. "Today" is an argument, never a hidden global
3. Validation errors are values; nothing is silently corrected
4. Storage is swappable and never takes the app down with it
5. Every mutation and export is logged
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
