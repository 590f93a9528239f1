"""Integration tests for complete mirror runs.

These tests run the orchestrator against real temporary directories with the
HTTP layer replaced by httpx.MockTransport.

Test Coverage:
- Sync scenarios: cleaning, exclusion, idempotence, boundary safety
- Remote fetch: public and token exports, placeholders on failure
"""
