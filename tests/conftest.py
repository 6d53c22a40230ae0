import pytest

from ark_client.config import ClientConfig
from ark_client.seeds import SeedTable


@pytest.fixture
def config() -> ClientConfig:
    # Built explicitly so ARK_CLIENT_* variables in the environment don't leak in.
    return ClientConfig(probe_timeout=1.0, config_timeout=1.0, request_timeout=1.0)


@pytest.fixture
def no_shuffle():
    return lambda peers: None


@pytest.fixture
def seeds() -> SeedTable:
    return SeedTable(
        {
            "devnet": [
                {"ip": "10.0.0.1", "port": 4002},
                {"ip": "10.0.0.2", "port": 4002},
            ],
        }
    )
