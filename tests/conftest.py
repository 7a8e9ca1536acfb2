import pytest

from dailylog.core import reset_facility
from dailylog.core.facility import LogFacility
from dailylog.core.store import ConfigurationStore
from dailylog.core.tracer import TracerConfiguration, set_tracer_config
from tests.helpers.log_helpers import fixed_clock


@pytest.fixture
def log_dir(tmp_path):
    directory = tmp_path / "logs"
    directory.mkdir()
    return directory


@pytest.fixture
def store():
    return ConfigurationStore()


@pytest.fixture
def facility(store):
    return LogFacility(store=store, clock=fixed_clock)


@pytest.fixture(autouse=True)
def reset_process_defaults():
    yield
    reset_facility()
    set_tracer_config(TracerConfiguration())
