"""Unit tests for client configuration and API constants."""

import pytest

from typedcms.delivery.core import (
    DEFAULT_LIMIT,
    MAX_INCLUDE_DEPTH,
    MAX_LIMIT,
    ClientConfig,
    ConfigurationError,
    DeliveryApi,
    get_base_url,
    normalize_include,
    normalize_limit,
)


def test_get_base_url():
    assert get_base_url(DeliveryApi.DELIVERY) == "https://cdn.contentful.com"
    assert get_base_url(DeliveryApi.PREVIEW) == "https://preview.contentful.com"


@pytest.mark.parametrize(
    "limit,expected",
    [(None, DEFAULT_LIMIT), (0, DEFAULT_LIMIT), (-5, DEFAULT_LIMIT), (25, 25), (5000, MAX_LIMIT)],
)
def test_normalize_limit(limit, expected):
    assert normalize_limit(limit) == expected


def test_normalize_limit_custom_default():
    assert normalize_limit(0, default=10) == 10


@pytest.mark.parametrize("include,expected", [(None, 0), (-1, 0), (2, 2), (50, MAX_INCLUDE_DEPTH)])
def test_normalize_include(include, expected):
    assert normalize_include(include) == expected


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig(space_id="space", access_token="token")
        assert config.environment == "master"
        assert config.locale == "en-US"
        assert config.api == DeliveryApi.DELIVERY
        assert config.default_limit == 100
        assert config.base_url == "https://cdn.contentful.com"
        assert config.environment_path == "/spaces/space/environments/master"

    def test_preview_base_url(self):
        config = ClientConfig(space_id="s", access_token="t", api=DeliveryApi.PREVIEW)
        assert config.base_url == "https://preview.contentful.com"

    def test_is_frozen(self):
        config = ClientConfig(space_id="s", access_token="t")
        with pytest.raises(AttributeError):
            config.space_id = "other"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"space_id": "", "access_token": "t"},
            {"space_id": "s", "access_token": ""},
            {"space_id": "s", "access_token": "t", "timeout": 0},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            ClientConfig(**kwargs)

    def test_from_env(self):
        config = ClientConfig.from_env(
            {
                "TYPEDCMS_SPACE_ID": "space",
                "TYPEDCMS_ACCESS_TOKEN": "token",
                "TYPEDCMS_ENVIRONMENT": "staging",
                "TYPEDCMS_LOCALE": "de-DE",
                "TYPEDCMS_PREVIEW": "true",
            }
        )
        assert config.space_id == "space"
        assert config.environment == "staging"
        assert config.locale == "de-DE"
        assert config.api == DeliveryApi.PREVIEW

    def test_from_env_defaults(self):
        config = ClientConfig.from_env({"TYPEDCMS_SPACE_ID": "s", "TYPEDCMS_ACCESS_TOKEN": "t"})
        assert config.environment == "master"
        assert config.api == DeliveryApi.DELIVERY

    def test_from_env_missing(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig.from_env({"TYPEDCMS_SPACE_ID": "s"})
        assert "TYPEDCMS_ACCESS_TOKEN" in str(exc_info.value)
        assert "TYPEDCMS_SPACE_ID" not in str(exc_info.value)
