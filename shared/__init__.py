"""
Shared utilities for the scs-client SDK.

This package aggregates the building blocks the client relies on:

- config: Client configuration via pydantic-settings
- logging: Structured logging with trace and call correlation
- metrics: Prometheus request metrics
- tracing: OpenTelemetry tracing config
- errors: Canonical error taxonomy
- test_helpers: Token factory and transport doubles for tests

Do not import from scs_client into shared/.
"""
