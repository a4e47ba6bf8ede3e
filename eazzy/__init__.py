"""
EAZZY - Source Package

A personal finance tracker: register with your income schedule,
log income and expenses, and review them month by month.

DESIGN PRINCIPLES:
1. The remote store is authoritative when it is available
2. A remote failure never reaches the user as an error
3. Every write reports which backend persisted it
4. Summaries are derived, never stored
"""

__version__ = "1.0.0"
__author__ = "EAZZY Team"
