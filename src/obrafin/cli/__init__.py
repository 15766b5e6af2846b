"""
Command Line Interface Package

CLI over a ledger state file.

Command Structure:
- obrafin: Main entry point with utility commands (version, config)
- obrafin cashflow / kpis / iva / plan / profitability / alerts / chart: read-only views
- obrafin validate-docs / suggest-category: tax-document checks and categorization help
- obrafin bank import|summary: statement import
- obrafin reconcile suggest|apply|undo: bank reconciliation

Commands that change data (bank import, reconcile apply/undo) write the
state file back in place.
"""
