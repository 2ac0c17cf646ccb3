import pytest

from dynagrad.core.tape import use_tape
from dynagrad.core.config import using_config


@pytest.fixture(autouse=True)
def tape():
    """Every test builds its graph on a fresh tape with default engine settings."""
    with use_tape() as t, using_config(enable_backprop=True, retain_grad=False):
        yield t
