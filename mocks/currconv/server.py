"""
Mock currency converter API for local runs and integration tests.

Serves the compact form of `/api/v7/convert`:

    200 {"USD_EUR": 0.92}
    400 {"status": 400, "error": "Invalid currency pair"}
"""

from typing import Dict, Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from shared.logging import get_logger


DEFAULT_RATES: Dict[str, float] = {
    "USD_EUR": 0.92,
    "EUR_USD": 1.087,
    "USD_GBP": 0.79,
    "GBP_USD": 1.266,
    "USD_JPY": 149.5,
    "EUR_GBP": 0.858,
}


class MockCurrencyConverterServer:
    """Mock currency converter server implementation."""

    def __init__(self, api_key: str = "test-api-key", rates: Optional[Dict[str, float]] = None, port: int = 8090):
        self.port = port
        self.api_key = api_key
        self.rates: Dict[str, float] = dict(DEFAULT_RATES if rates is None else rates)
        self.request_count = 0
        self.logger = get_logger("mock.currconv")
        self.app = FastAPI(title="Mock Currency Converter", version="1.0.0")

        self._setup_routes()

    def _setup_routes(self):
        """Set up API routes."""

        @self.app.get("/api/v7/convert")
        async def convert(
            q: str = Query(..., description="Comma separated pair keys, e.g. USD_EUR"),
            apiKey: Optional[str] = Query(None),
        ):
            """Convert endpoint."""
            self.request_count += 1

            if apiKey != self.api_key:
                return JSONResponse(
                    status_code=401,
                    content={"status": 401, "error": "Invalid API key"},
                )

            result: Dict[str, float] = {}
            for pair_key in q.split(","):
                if pair_key not in self.rates:
                    self.logger.info("Unknown pair requested", query=pair_key)
                    return JSONResponse(
                        status_code=400,
                        content={"status": 400, "error": f"Invalid currency pair: {pair_key}"},
                    )
                result[pair_key] = self.rates[pair_key]

            return result

    def run(self):
        """Run the mock server."""
        import uvicorn
        uvicorn.run(self.app, host="0.0.0.0", port=self.port)


if __name__ == "__main__":
    server = MockCurrencyConverterServer()
    server.run()
