"""
Shared utilities for the currency conversion service.

This package aggregates common building blocks consumed by the service:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and the uniform error envelope
- base_service: FastAPI application scaffolding

Any cross-service logic should live here to avoid import cycles. Do not
import from service_* packages into shared/.
"""
