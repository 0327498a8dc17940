"""
optimizer.py

Одномірний оптимізатор: точки входу minimize() / maximize().

Схема запуску:
    1) журнал обчислень очищується, встановлюється режим (min / max);
    2) bracket_min() знаходить дужку з двох початкових точок;
    3) дужка уточнюється методом Брента (за замовчуванням) або методом
       золотого перерізу;
    4) повертається точка екстремуму та значення функції у ній
       (для максимізації - з початковим знаком).

Максимізація реалізована як мінімізація -f: знак змінюється один раз,
при записі значення в журнал.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .bracket import Bracket, bracket_min
from .brent import brent_min
from .constants import OptimizerConstants
from .evaluation_log import EvaluationLog, EvaluationRecord, Scalar1DFunction
from .golden_section import golden_min

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Константи / "enum" для методів уточнення
# ---------------------------------------------------------------------------

METHOD_BRENT = "brent"
METHOD_GOLDEN_SECTION = "golden_section"

MODE_MINIMIZE = "minimize"
MODE_MAXIMIZE = "maximize"

DEFAULT_MAX_EVAL = 100


def _refiner(method: str) -> Callable[[EvaluationLog, Bracket, OptimizerConstants], int]:
    refiners = {
        METHOD_BRENT: brent_min,
        METHOD_GOLDEN_SECTION: golden_min,
    }
    try:
        return refiners[method]
    except KeyError:
        raise ValueError(
            f"Optimizer1D: невідомий метод '{method}', "
            f"доступні: {sorted(refiners)}."
        ) from None


# ---------------------------------------------------------------------------
# Результат одного запуску
# ---------------------------------------------------------------------------

@dataclass
class ExtremumResult:
    """
    Підсумок одного запуску оптимізації.

    Атрибути:
        x_star      - знайдена точка екстремуму;
        f_star      - значення f(x_star) (для максимізації - максимум f);
        mode        - "minimize" або "maximize";
        method      - метод уточнення ("brent", "golden_section");
        bracket     - x-координати знайденої дужки (a, b, c);
        func_evals  - кількість викликів цільової функції.
    """
    x_star: float
    f_star: float
    mode: str
    method: str
    bracket: Tuple[float, float, float]
    func_evals: int

    def as_tuple(self) -> Tuple[float, float]:
        return self.x_star, self.f_star


# ---------------------------------------------------------------------------
# Оптимізатор
# ---------------------------------------------------------------------------

class Optimizer1D:
    """
    Безградієнтний пошук екстремуму функції однієї змінної.

    Використання:
        opt = Optimizer1D(func, max_eval=100)
        xmin, fmin = opt.minimize(0.0, 10.0)
        xs, fs = opt.get_stats()

    Екземпляр не потокобезпечний: кожен потік має використовувати власний.

    Налаштування (options):
        x_tolerance       : відносний допуск за x (default: sqrt(eps))
        abs_tolerance     : абсолютна добавка до допуску Брента
                            (default: 1e-3 * x_tolerance)
        max_search_ratio  : обмеження параболічної екстраполяції при пошуку
                            дужки (default: 100)
    """

    def __init__(
        self,
        func: Scalar1DFunction,
        max_eval: int = DEFAULT_MAX_EVAL,
        dtype: Any = np.float64,
        options: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
    ) -> None:
        if not callable(func):
            raise TypeError(
                f"Optimizer1D: цільова функція повинна бути callable, отримано {type(func)}."
            )
        if isinstance(max_eval, bool) or int(max_eval) != max_eval or max_eval <= 0:
            raise ValueError(
                f"Optimizer1D: max_eval повинен бути додатним цілим числом, отримано {max_eval!r}."
            )

        self.func = func
        self.max_eval = int(max_eval)
        self.options: Dict[str, Any] = options or {}
        self.constants = OptimizerConstants.from_options(dtype, self.options)
        self.name: str = name or self.__class__.__name__
        self.log = EvaluationLog(func, self.max_eval, dtype=self.constants.dtype)
        self.last_result: Optional[ExtremumResult] = None

    # ------------------------------------------------------------------
    # Публічні точки входу
    # ------------------------------------------------------------------

    def minimize(self, xA: float, xB: float, method: str = METHOD_BRENT) -> Tuple[float, float]:
        """Мінімізувати f, стартуючи з точок xA, xB. Повертає (xmin, Fmin)."""
        return self.optimize(xA, xB, maximize=False, method=method).as_tuple()

    def maximize(self, xA: float, xB: float, method: str = METHOD_BRENT) -> Tuple[float, float]:
        """Максимізувати f, стартуючи з точок xA, xB. Повертає (xmax, Fmax)."""
        return self.optimize(xA, xB, maximize=True, method=method).as_tuple()

    def optimize(
        self,
        xA: float,
        xB: float,
        maximize: bool = False,
        method: str = METHOD_BRENT,
    ) -> ExtremumResult:
        """
        Виконати один повний запуск: пошук дужки + уточнення.

        Невдалий запуск завершується винятком з тегом kind (core.errors.ErrorKind):
        DEGENERATE_SEED, BRACKET_INVARIANT або BUDGET_EXCEEDED. Усі три класи
        успадковують Optimizer1DError, тож достатньо одного except і перевірки
        exc.kind. Після винятку last_result дорівнює None.

        Raises
        ------
        DegenerateSeedError, BracketInvariantError, BudgetExceededError
            Див. core.errors. Помилки не перехоплюються.
        ValueError
            Невідомий метод.
        """
        refine = _refiner(method)
        mode = MODE_MAXIMIZE if maximize else MODE_MINIMIZE

        self.last_result = None
        self.log.reset(maximize=maximize)
        logger.debug("%s.%s(%r, %r) method=%s", self.name, mode, xA, xB, method)

        bracket = bracket_min(self.log, xA, xB, self.constants)
        best = refine(self.log, bracket, self.constants)

        x_star = float(self.log.x(best))
        f_star = float(self.log.f(best))
        if maximize:
            f_star = -f_star

        result = ExtremumResult(
            x_star=x_star,
            f_star=f_star,
            mode=mode,
            method=method,
            bracket=tuple(float(self.log.x(i)) for i in bracket),
            func_evals=self.log.n_calls,
        )
        self.last_result = result
        logger.debug(
            "%s.%s: x*=%.16g f*=%.16g after %d evaluations",
            self.name, mode, x_star, f_star, result.func_evals,
        )
        return result

    # ------------------------------------------------------------------
    # Статистика останнього запуску
    # ------------------------------------------------------------------

    def get_stats(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Копії послідовностей x та f для всіх викликів останнього запуску.

        Значення f - у тому вигляді, як вони зберігаються в журналі
        (для maximize() це -f(x)).
        """
        return self.log.get_stats()

    def get_n_calls(self) -> int:
        return self.log.n_calls

    def records(self) -> List[EvaluationRecord]:
        return self.log.records()

    # camelCase-аліаси
    getStats = get_stats
    getNFcalls = get_n_calls


# ---------------------------------------------------------------------------
# Функції-обгортки для разового запуску
# ---------------------------------------------------------------------------

def minimize_scalar(
    func: Scalar1DFunction,
    xA: float,
    xB: float,
    max_eval: int = DEFAULT_MAX_EVAL,
    method: str = METHOD_BRENT,
    **kwargs: Any,
) -> ExtremumResult:
    """Мінімізувати func новим екземпляром Optimizer1D."""
    return Optimizer1D(func, max_eval=max_eval, **kwargs).optimize(xA, xB, method=method)


def maximize_scalar(
    func: Scalar1DFunction,
    xA: float,
    xB: float,
    max_eval: int = DEFAULT_MAX_EVAL,
    method: str = METHOD_BRENT,
    **kwargs: Any,
) -> ExtremumResult:
    """Максимізувати func новим екземпляром Optimizer1D."""
    return Optimizer1D(func, max_eval=max_eval, **kwargs).optimize(
        xA, xB, maximize=True, method=method
    )


__all__ = [
    "METHOD_BRENT",
    "METHOD_GOLDEN_SECTION",
    "MODE_MINIMIZE",
    "MODE_MAXIMIZE",
    "DEFAULT_MAX_EVAL",
    "ExtremumResult",
    "Optimizer1D",
    "minimize_scalar",
    "maximize_scalar",
]
