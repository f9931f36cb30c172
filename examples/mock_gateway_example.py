"""Mock gateway for working on the console without the real one.

Run with:
    uvicorn examples.mock_gateway_example:app --port 8080

Every request to a path other than /metrics and /health is counted, so
hitting a few URLs fills the dashboard. Admin endpoints expect
``Authorization: Bearer dev-admin-token``.
"""

from gatewaylens.adapters.mock_gateway import GatewayCounters, create_mock_gateway_app

counters = GatewayCounters()

# Seed some traffic so the dashboard has something to show.
counters.record_auth(success=True)
counters.record_auth(success=True)
counters.record_auth(success=False)
counters.record_cache(hit=True)
counters.record_cache(hit=False)
counters.record_backend_latency("http://user-service:8002", 0.045)
counters.record_backend_error("http://auth-service:8001")

app = create_mock_gateway_app(
    counters,
    admin_token="dev-admin-token",
    admin_config={"config": {"rate_limit": {"requests_per_minute": 100}}},
)
