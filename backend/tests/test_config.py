"""Tests for configuration and route wiring."""

import pytest

from shelflife.core.config import Settings, settings


# ---------------------------------------------------------------------------
# Configuration Tests
# ---------------------------------------------------------------------------


class TestConfig:
    def test_cors_origins_configured(self):
        """CORS origins should be properly configured."""
        origins = settings.CORS_ORIGINS.split(",")
        assert len(origins) >= 1
        assert any(o.startswith("http") for o in origins)

    def test_production_not_use_wildcard_cors(self):
        """Production should not use wildcard CORS origins."""
        if settings.is_production:
            assert "*" not in settings.CORS_ORIGINS.split(",")

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("REFERENCE_TIMEZONE", "Europe/Amsterdam")
        monkeypatch.setenv("ENVIRONMENT", "production")
        overridden = Settings()
        assert overridden.REFERENCE_TIMEZONE == "Europe/Amsterdam"
        assert overridden.is_production is True

    def test_bounded_database_waits(self):
        assert settings.DB_POOL_TIMEOUT > 0
        assert settings.DB_CONNECT_TIMEOUT > 0


# ---------------------------------------------------------------------------
# API Endpoint Method Tests
# ---------------------------------------------------------------------------


def _routes(router) -> set[tuple[str, str]]:
    pairs = set()
    for route in router.routes:
        if hasattr(route, "methods") and hasattr(route, "path"):
            for method in route.methods:
                pairs.add((method, route.path))
    return pairs


class TestAPIEndpointMethods:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/products"),
            ("GET", "/products/{sku}"),
            ("POST", "/products"),
            ("PUT", "/products/{sku}"),
            ("DELETE", "/products/{sku}"),
        ],
    )
    def test_product_routes(self, method, path):
        from shelflife.api.v1.products import router

        assert (method, path) in _routes(router)

    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/records"),
            ("GET", "/records/expiring"),
            ("POST", "/records"),
            ("DELETE", "/records/{sku}/{production_date}"),
        ],
    )
    def test_record_routes(self, method, path):
        from shelflife.api.v1.records import router

        assert (method, path) in _routes(router)

    def test_health_is_public_get(self):
        from shelflife.api.v1.router import api_v1_router

        assert ("GET", "/health") in _routes(api_v1_router)

    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/stats"),
            ("POST", "/initialize-demo"),
            ("GET", "/expiry/calculate"),
            ("GET", "/test"),
        ],
    )
    def test_system_routes(self, method, path):
        from shelflife.api.v1.system import router

        assert (method, path) in _routes(router)
