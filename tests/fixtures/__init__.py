"""
Test Fixtures

Builders for ledger records with sensible defaults, and a synthetic state
blob in the host application's JSON shape.
"""
