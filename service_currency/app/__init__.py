"""
Currency conversion service package.

Answers `GET /api/v1/currency/{from}/{to}` with the current exchange rate,
serving from Redis when a fresh entry exists and otherwise asking the
upstream conversion provider (cache-aside).

Structure:
- app.main: FastAPI app, routes, and startup/shutdown wiring.
- app.config: Service settings and credential loading.
- app.models: Request, response and provider payload models.
- app.resolver: Cache-aside resolution of a single currency pair.
- app.adapters: HTTP client for the upstream provider.
- app.cache: Redis-backed rate cache.
"""
