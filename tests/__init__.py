"""
Finance Tracker Test Suite

This package contains tests for the Finance Tracker application:

- test_models.py: Entity schemas, decimal canonicalisation, date coercion
- test_storage.py: In-memory and MySQL repositories, schema bootstrap
- test_aggregation.py: Monthly totals, breakdowns, series, progress, interest
- test_presentation.py: Currency and percentage formatting, chart records
- test_resources.py: CRUD endpoints for all four resources
- test_dashboard.py: Dashboard, analytics and summary endpoints
- test_settings.py: Currency table and currency preference
- test_errors.py: Validation, not-found and unexpected-failure responses
- test_client.py: HTTP client and its query cache

Run all tests:
    pytest tests/

Run specific test file:
    pytest tests/test_aggregation.py

Run with verbose output:
    pytest tests/ -v
"""
