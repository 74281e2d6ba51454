"""
Ledgerbook

In-memory bank-account ledger with per-account fee, limit and interest
rules, plus an academic gradebook with weighted grading categories and
credit-hour GPA. All monetary values use Decimal.
"""

__version__ = "1.0.0"
