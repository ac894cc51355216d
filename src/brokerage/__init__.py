"""Paper brokerage ledger: wallet, positions and transaction log."""

__version__ = "0.1.0"
