import pytest

from config.manager import ConfigurationManager
from config.models import Config, ContextConfig
from fakes import FakeVCS


@pytest.fixture
def fake_vcs():
    """Factory for FakeVCS instances."""
    return FakeVCS


@pytest.fixture
def empty_config():
    """A configuration manager with nothing configured."""
    return ConfigurationManager(config=Config())


@pytest.fixture
def make_config():
    def _make(**context_values):
        return ConfigurationManager(config=Config(context=ContextConfig(**context_values)))
    return _make


@pytest.fixture(autouse=True)
def reset_config_singleton():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()
