import pytest

from cursorlight.logging import set_quiet


@pytest.fixture(autouse=True)
def quiet_logger():
    set_quiet(True)
    yield
    set_quiet(False)
