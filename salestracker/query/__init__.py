"""Filter validation, query compilation and execution for ledger entries."""
