import pytest

from restclient import RestClient, RestClientConfig
from tests.utils.fakes import FakeHttpFactory, json_response


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        "RESTCLIENT_BASE_URL",
        "RESTCLIENT_TIMEOUT",
        "RESTCLIENT_USER_AGENT",
        "RESTCLIENT_FOLLOW_REDIRECTS",
        "RESTCLIENT_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def config(base_url: str) -> RestClientConfig:
    return RestClientConfig(base_url=base_url)


@pytest.fixture
def client(config: RestClientConfig) -> RestClient:
    return RestClient(config=config)


@pytest.fixture
def fake_factory() -> FakeHttpFactory:
    return FakeHttpFactory(json_response(b'{"id": 1}'))


@pytest.fixture
def fake_client(config: RestClientConfig, fake_factory: FakeHttpFactory) -> RestClient:
    return RestClient(config=config, http_factory=fake_factory)
