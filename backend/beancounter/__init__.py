"""Bean Counter ERP: coffee shop POS, loyalty ledger and back office API."""
