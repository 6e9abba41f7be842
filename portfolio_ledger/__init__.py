"""B3 portfolio ledger reconciliation service package."""
