"""Shared client configuration and API constants.

Hosts and paging limits live here, together with loading settings from
the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .enums import DeliveryApi
from .exceptions import ConfigurationError

BASE_URLS = {
    DeliveryApi.DELIVERY: "https://cdn.contentful.com",
    DeliveryApi.PREVIEW: "https://preview.contentful.com",
}

DEFAULT_ENVIRONMENT = "master"
DEFAULT_LOCALE = "en-US"
DEFAULT_LIMIT = 100
MAX_LIMIT = 1000  # API rejects larger pages
MAX_INCLUDE_DEPTH = 10
DEFAULT_TIMEOUT = 30.0

ENV_SPACE_ID = "TYPEDCMS_SPACE_ID"
ENV_ACCESS_TOKEN = "TYPEDCMS_ACCESS_TOKEN"
ENV_ENVIRONMENT = "TYPEDCMS_ENVIRONMENT"
ENV_LOCALE = "TYPEDCMS_LOCALE"
ENV_PREVIEW = "TYPEDCMS_PREVIEW"


def get_base_url(api: DeliveryApi) -> str:
    """Get the REST base URL for an API.

    Examples:
        >>> get_base_url(DeliveryApi.DELIVERY)
        'https://cdn.contentful.com'
        >>> get_base_url(DeliveryApi.PREVIEW)
        'https://preview.contentful.com'
    """
    return BASE_URLS[api]


def normalize_limit(limit: int | None, default: int = DEFAULT_LIMIT) -> int:
    """Clamp a page size into the range the API accepts.

    Non-positive or missing limits fall back to ``default``.
    """
    if limit is None or limit <= 0:
        return default
    return min(int(limit), MAX_LIMIT)


def normalize_include(include: int | None) -> int:
    if include is None or include < 0:
        return 0
    return min(int(include), MAX_INCLUDE_DEPTH)


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one space/environment.

    Attributes:
        space_id: Space identifier
        access_token: Delivery or preview API token
        environment: Environment alias (default: master)
        locale: Locale requested for every page
        api: Published content or preview
        timeout: Total per-request timeout in seconds
        default_limit: Page size used when a listing does not set one
    """

    space_id: str
    access_token: str
    environment: str = DEFAULT_ENVIRONMENT
    locale: str = DEFAULT_LOCALE
    api: DeliveryApi = DeliveryApi.DELIVERY
    timeout: float = DEFAULT_TIMEOUT
    default_limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if not self.space_id:
            raise ConfigurationError("space_id must be a non-empty string")
        if not self.access_token:
            raise ConfigurationError("access_token must be a non-empty string")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    @property
    def base_url(self) -> str:
        return get_base_url(self.api)

    @property
    def environment_path(self) -> str:
        """Path prefix shared by every space-scoped endpoint."""
        return f"/spaces/{self.space_id}/environments/{self.environment}"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ClientConfig:
        """Build a config from ``TYPEDCMS_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (for tests)

        Raises:
            ConfigurationError: If the space id or access token is missing
        """
        env = os.environ if environ is None else environ
        space_id = env.get(ENV_SPACE_ID, "")
        access_token = env.get(ENV_ACCESS_TOKEN, "")
        missing = [
            name
            for name, value in ((ENV_SPACE_ID, space_id), (ENV_ACCESS_TOKEN, access_token))
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

        preview = env.get(ENV_PREVIEW, "").lower() in ("1", "true", "yes")
        return cls(
            space_id=space_id,
            access_token=access_token,
            environment=env.get(ENV_ENVIRONMENT) or DEFAULT_ENVIRONMENT,
            locale=env.get(ENV_LOCALE) or DEFAULT_LOCALE,
            api=DeliveryApi.PREVIEW if preview else DeliveryApi.DELIVERY,
        )
