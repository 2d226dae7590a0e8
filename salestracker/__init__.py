"""SalesTracker: income/expense ledger with filtered listings and analytics."""
