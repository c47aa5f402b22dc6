"""XRP Unity Tracker: look up an XRP ledger account's balance and sequence."""
