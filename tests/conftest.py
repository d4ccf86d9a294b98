from freezegun.api import FakeDatetime
import pytest
from yaml.dumper import SafeDumper
from yaml.representer import SafeRepresenter


def pytest_configure():
    # front matter dumps datetime.now(), which is a FakeDatetime under freeze_time
    SafeDumper.add_representer(FakeDatetime, SafeRepresenter.represent_datetime)


@pytest.fixture(autouse=True)
def no_root_env(monkeypatch):
    monkeypatch.delenv('NOTER_ROOT', raising=False)
