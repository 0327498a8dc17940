"""
evaluation_log.py

Журнал обчислень цільової функції.

Ідея:
    - кожен виклик f(x) записується як пара (x, f) з індексом 0..N-1;
    - усі алгоритми (пошук дужки, золотий перетин, метод Брента) працюють
      лише з індексами журналу, а не з копіями значень;
    - кількість записів обмежена max_eval, масиви виділяються один раз;
    - у режимі максимізації значення зберігається з протилежним знаком,
      тож у журналі f завжди "мінімізується".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

import numpy as np

from .errors import BudgetExceededError

logger = logging.getLogger(__name__)

Scalar1DFunction = Callable[[float], float]


@dataclass(frozen=True)
class EvaluationRecord:
    """
    Один запис журналу.

    Атрибути:
        index - порядковий номер виклику (0, 1, 2, ...)
        x     - аргумент
        f     - значення у тому вигляді, як воно зберігається
                (у режимі максимізації це -f(x))
    """
    index: int
    x: float
    f: float


class EvaluationLog:
    """
    Журнал викликів цільової функції з обмеженою місткістю.

    Використання:
        log = EvaluationLog(func, max_eval=100)
        log.reset(maximize=False)
        i = log.eval(1.5)
        log.x(i), log.f(i)
    """

    def __init__(self, func: Scalar1DFunction, max_eval: int, dtype: Any = np.float64) -> None:
        self.func = func
        self.max_eval = int(max_eval)
        self.dtype = dtype
        self.maximize_mode: bool = False
        self._x = np.zeros(self.max_eval, dtype=dtype)
        self._f = np.zeros(self.max_eval, dtype=dtype)
        self._n = 0

    def reset(self, maximize: bool = False) -> None:
        """Очистити журнал (логічно) та встановити режим."""
        self._n = 0
        self.maximize_mode = maximize

    def eval(self, x: float) -> int:
        """
        Обчислити f(x), записати результат і повернути його індекс.

        Якщо ліміт викликів уже вичерпано, функція не викликається.
        """
        if self._n >= self.max_eval:
            raise BudgetExceededError(
                f"EvaluationLog.eval: вичерпано ліміт у {self.max_eval} викликів функції.",
                max_eval=self.max_eval,
                n_evals=self._n,
            )
        fval = self.func(x)
        if self.maximize_mode:
            fval = -fval
        i = self._n
        self._x[i] = x
        self._f[i] = fval
        self._n += 1
        logger.debug("eval[%d]: F(%.16g)=%.16g", i, self._x[i], self._f[i])
        return i

    def x(self, i: int) -> Any:
        return self._x[i]

    def f(self, i: int) -> Any:
        return self._f[i]

    @property
    def n_calls(self) -> int:
        return self._n

    def __len__(self) -> int:
        return self._n

    @property
    def remaining(self) -> int:
        return self.max_eval - self._n

    @property
    def exhausted(self) -> bool:
        return self._n >= self.max_eval

    def get_stats(self) -> Tuple[np.ndarray, np.ndarray]:
        """Копії масивів x та f для індексів [0, N)."""
        return self._x[: self._n].copy(), self._f[: self._n].copy()

    def records(self) -> List[EvaluationRecord]:
        return [
            EvaluationRecord(index=i, x=float(self._x[i]), f=float(self._f[i]))
            for i in range(self._n)
        ]


__all__ = [
    "Scalar1DFunction",
    "EvaluationRecord",
    "EvaluationLog",
]
