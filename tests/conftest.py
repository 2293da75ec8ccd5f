import os

import pytest

# Keep a stray xliff12.json in the working directory out of the test run
os.environ.setdefault("XLIFF12_CONFIG", os.path.join(os.path.dirname(__file__), "no-such-config.json"))

TESTDATA = os.path.join(os.path.dirname(__file__), "testdata")


@pytest.fixture
def testdata():
    def path(name):
        return os.path.join(TESTDATA, name)
    return path


@pytest.fixture(autouse=True)
def fresh_settings():
    from xliff12.settings_manager import reset_settings
    reset_settings()
    yield
    reset_settings()
