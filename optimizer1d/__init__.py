"""
optimizer1d

Безградієнтний пошук екстремуму функції однієї змінної:
пошук дужки + метод Брента (або метод золотого перерізу).
"""

import logging

from .core.errors import (
    BracketInvariantError,
    BudgetExceededError,
    DegenerateSeedError,
    ErrorKind,
    Optimizer1DError,
)
from .core.optimizer import (
    METHOD_BRENT,
    METHOD_GOLDEN_SECTION,
    ExtremumResult,
    Optimizer1D,
    maximize_scalar,
    minimize_scalar,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Optimizer1D",
    "ExtremumResult",
    "METHOD_BRENT",
    "METHOD_GOLDEN_SECTION",
    "minimize_scalar",
    "maximize_scalar",
    "ErrorKind",
    "Optimizer1DError",
    "DegenerateSeedError",
    "BracketInvariantError",
    "BudgetExceededError",
]
