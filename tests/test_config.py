"""
Tests for AggregatorConfig.
"""

import pytest

from src.itinerary_aggregator.config import AggregatorConfig


class TestAggregatorConfig:
    """Tests for configuration values and environment loading."""

    def test_defaults(self):
        config = AggregatorConfig()

        assert config.flights_base_url == ""
        assert config.request_timeout == 5.0
        assert config.query_timeout == 10.0
        assert config.server_port == 8080

    def test_endpoint_urls(self):
        config = AggregatorConfig(
            flights_base_url="http://a:1/",
            flight_to_book_base_url="http://b:2/",
        )

        assert config.flights_url == "http://a:1/flights"
        assert config.flight_to_book_url == "http://b:2/flight_to_book"

    @pytest.mark.parametrize("field", ["request_timeout", "query_timeout"])
    def test_rejects_non_positive_timeouts(self, field):
        with pytest.raises(ValueError, match=field):
            AggregatorConfig(**{field: 0})

    def test_frozen(self):
        config = AggregatorConfig()
        with pytest.raises(AttributeError):
            config.server_port = 9090

    def test_from_env(self):
        config = AggregatorConfig.from_env(
            env={
                "JSERVER1_NAME": "jserver1",
                "JSERVER1_PORT": "8081",
                "JSERVER2_NAME": "jserver2",
                "JSERVER2_PORT": "8082",
                "SERVER_PORT": "9000",
                "REQUEST_TIMEOUT": "2.5",
                "QUERY_TIMEOUT": "4",
            }
        )

        assert config.flights_base_url == "http://jserver1:8081/"
        assert config.flight_to_book_base_url == "http://jserver2:8082/"
        assert config.server_port == 9000
        assert config.request_timeout == 2.5
        assert config.query_timeout == 4.0

    def test_from_env_missing_port_leaves_url_empty(self):
        config = AggregatorConfig.from_env(
            env={"JSERVER1_NAME": "jserver1", "JSERVER2_NAME": "jserver2", "JSERVER2_PORT": "1"}
        )

        assert config.flights_base_url == ""
        assert config.flight_to_book_base_url == "http://jserver2:1/"

    def test_from_env_empty_mapping_uses_defaults(self):
        assert AggregatorConfig.from_env(env={}) == AggregatorConfig()

    def test_from_env_bad_timeout(self):
        with pytest.raises(ValueError):
            AggregatorConfig.from_env(env={"REQUEST_TIMEOUT": "-1"})
