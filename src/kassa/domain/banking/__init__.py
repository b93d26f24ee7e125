"""Banking domain package.

Bank accounts, imported statement transactions, payment matching and
reconciliation sessions.
"""
