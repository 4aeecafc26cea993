"""
Regression backends.

Available backends:
    CPUNormalEquationsBackend: CPU implementation inverting X'X directly
"""

from pylinreg.regression.backends.cpu import CPUNormalEquationsBackend

__all__ = [
    "CPUNormalEquationsBackend",
]
