"""API module for riftdesk.

- Validates inputs, reads the DB through repo/aggregation
- Returns JSON payloads for the UI
- Forbidden: writes to match history, HTML rendering
"""
