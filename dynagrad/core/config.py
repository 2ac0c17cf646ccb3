# dynagrad/core/config.py
"""
Engine-wide switches and numerical defaults.

    from dynagrad.core.config import config, using_config, no_grad

    with no_grad():
        y = square(x)        # value only, nothing recorded

    with using_config(retain_grad=True):
        y.backward()         # intermediate gradients stay readable
"""

from contextlib import contextmanager
from dataclasses import dataclass, fields


@dataclass
class EngineConfig:
    """Configuration for graph recording and gradient checks."""
    # Graph recording
    enable_backprop: bool = True  # False: operations produce leaves, nothing is recorded

    # Backward pass
    retain_grad: bool = False  # True: keep non-leaf gradients after they are consumed

    # Numerical verification
    eps: float = 1e-4   # central-difference step
    atol: float = 1e-6  # absolute tolerance for gradient_check


config = EngineConfig()


@contextmanager
def using_config(**overrides):
    """Temporarily override fields of the global `config`."""
    known = {f.name for f in fields(EngineConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise AttributeError(f"Unknown config field(s): {sorted(unknown)}")

    previous = {name: getattr(config, name) for name in overrides}
    try:
        for name, val in overrides.items():
            setattr(config, name, val)
        yield config
    finally:
        for name, val in previous.items():
            setattr(config, name, val)


def no_grad():
    return using_config(enable_backprop=False)
