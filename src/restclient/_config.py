from os import environ as env
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, field_validator

from ._utils.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ENV_BASE_URL,
    ENV_DEBUG,
    ENV_FOLLOW_REDIRECTS,
    ENV_TIMEOUT,
    ENV_USER_AGENT,
)
from .models.errors import BaseUrlMissingError


def _parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class RestClientConfig(BaseModel):
    """Client-level settings shared by every request a ``RestClient`` executes."""

    base_url: str
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True
    debug: bool = False

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_url(cls, value: str) -> str:
        # only absolute http(s) URLs; the trailing slash is dropped so resources join cleanly
        HttpUrl(url=value)
        return str(value).rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> "RestClientConfig":
        """Build a config from ``RESTCLIENT_*`` environment variables.

        A ``.env`` file in the working directory is loaded first. Explicit
        keyword overrides take precedence over the environment.

        Raises:
            BaseUrlMissingError: If no base URL is given or set in the environment.
            ValidationError: If a value from the environment or overrides is invalid.
        """
        load_dotenv()

        base_url = overrides.get("base_url", env.get(ENV_BASE_URL))
        if not base_url:
            raise BaseUrlMissingError()

        values: dict[str, Any] = {"base_url": base_url}

        # raw strings are coerced and validated by the model
        for key, env_name in (("timeout", ENV_TIMEOUT), ("user_agent", ENV_USER_AGENT)):
            if key in overrides:
                values[key] = overrides[key]
            elif env.get(env_name):
                values[key] = env[env_name]

        if "follow_redirects" in overrides:
            values["follow_redirects"] = overrides["follow_redirects"]
        else:
            values["follow_redirects"] = _parse_bool(
                env.get(ENV_FOLLOW_REDIRECTS), True
            )

        if "debug" in overrides:
            values["debug"] = overrides["debug"]
        else:
            values["debug"] = _parse_bool(env.get(ENV_DEBUG), False)

        return cls(**values)
