"""
Finança Fácil - Source Package

A personal finance tracker for a single user on a single device.

DESIGN PRINCIPLES:
1. The ledger is the only state; every aggregate is recomputed from it
2. Persistence is best-effort and never blocks the user
3. The AI is optional - the app works fully without it
4. Storage layer is swappable
"""

__version__ = "1.0.1"
__author__ = "Finança Fácil Team"
