"""Aggregation module for match statistics.

- Reads the DB through repo and reduces rows into stat bundles
- Pure build_* / aggregate_* functions take already-fetched entities
- Forbidden: writes, HTTP concerns
"""
