# dynagrad/ops/transcendental.py
import numpy as np
from scipy.special import erf as scipy_erf

from ..core.function import Operation


class Exp(Operation):
    """y = eˣ,  dx = eˣ · dy"""
    op_tag = "exp"
    nin, nout = 1, 1

    def forward(self, x):
        return np.exp(x)

    def backward(self, gy):
        y, = self.ys
        return y * gy


class Log(Operation):
    op_tag = "log"
    nin, nout = 1, 1

    def forward(self, x):
        return np.log(x)

    def backward(self, gy):
        x, = self.xs
        return gy / x


class Sqrt(Operation):
    op_tag = "sqrt"
    nin, nout = 1, 1

    def forward(self, x):
        return np.sqrt(x)

    def backward(self, gy):
        s, = self.ys
        return 0.5 * gy / s


class Erf(Operation):
    """
    Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt

    Derivative: d/dx erf(x) = (2/√π) * e^(-x²)
    """
    op_tag = "erf"
    nin, nout = 1, 1

    def forward(self, x):
        return scipy_erf(x)

    def backward(self, gy):
        x, = self.xs
        return (2.0 / np.sqrt(np.pi)) * np.exp(-x * x) * gy


def exp(x):  return Exp()(x)
def log(x):  return Log()(x)
def sqrt(x): return Sqrt()(x)
def erf(x):  return Erf()(x)
