"""
Lock-and-mint tests.

Unit tests run against an in-memory bridge client; the live testnet test is
selected with ``-m integration``.
"""
