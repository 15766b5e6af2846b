"""
Test Suite for Obrafin

Test Structure:
- fixtures/: Synthetic ledger records and a complete state blob
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration and CLI workflows over a state file

Test Categories:
- Core utilities (money, dates, currency, models, storage)
- Cash projection, cashflow, KPIs and state commands
- Bank statement import and reconciliation
- IVA, RUT and tax documents
- Payment plans, profitability and alerts

All ledger data is synthetic.
"""
