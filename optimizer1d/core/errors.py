"""
errors.py

Типи помилок одномірного оптимізатора.

Три види відмов, які передаються викликачу minimize()/maximize() без
повторних спроб і без "найкращої спроби" замість відповіді:

    DEGENERATE_SEED    - однакові початкові точки або однакові значення
                         функції в них (напрямок спуску не визначений);
    BRACKET_INVARIANT  - знайдена дужка не задовольняє умов впорядкування
                         (внутрішня неузгодженість алгоритму);
    BUDGET_EXCEEDED    - вичерпано ліміт викликів цільової функції.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    DEGENERATE_SEED = "degenerate_seed"
    BRACKET_INVARIANT = "bracket_invariant"
    BUDGET_EXCEEDED = "budget_exceeded"


class Optimizer1DError(Exception):
    """
    Базовий клас помилок оптимізатора.

    Атрибут kind дозволяє розрізняти види відмов без перевірки класу.
    """
    kind: ErrorKind


class DegenerateSeedError(Optimizer1DError, ValueError):
    kind = ErrorKind.DEGENERATE_SEED


class BracketInvariantError(Optimizer1DError, RuntimeError):
    kind = ErrorKind.BRACKET_INVARIANT


class BudgetExceededError(Optimizer1DError, RuntimeError):
    """
    Ліміт викликів функції вичерпано.

    Атрибути:
        max_eval  - ліміт викликів;
        n_evals   - кількість виконаних викликів на момент відмови.
    """
    kind = ErrorKind.BUDGET_EXCEEDED

    def __init__(self, message: str, max_eval: int, n_evals: Optional[int] = None) -> None:
        super().__init__(message)
        self.max_eval = max_eval
        self.n_evals = max_eval if n_evals is None else n_evals


__all__ = [
    "ErrorKind",
    "Optimizer1DError",
    "DegenerateSeedError",
    "BracketInvariantError",
    "BudgetExceededError",
]
