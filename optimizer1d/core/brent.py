"""
brent.py

Метод Брента: уточнення мінімуму в дужці комбінацією параболічної
інтерполяції та кроків золотого перерізу.

Стан (усе - індекси EvaluationLog):
    a, b  - межі інтервалу, x(a) < x(b);
    x     - найкраща точка;
    w     - друга найкраща;
    v     - третя (попереднє значення w).

На кожній ітерації обчислюються три кандидати кроку:
    - параболічний через (w, x, v);
    - золотий, у більший з підінтервалів;
    - обернений золотий, геть від ближчої межі.

Вибір кроку:
    1) ratio - положення x в [a, b] (обернене, якщо параболічний крок
       додатний); якщо ratio < 0.1*φ - обернений золотий крок;
    2) інакше, якщо параболічний крок скінченний і не менший за tol,
       ratio > 0.1/φ і найгірша ширина інтервалу після нього не більша,
       ніж після золотого кроку - параболічний крок;
    3) інакше - золотий крок.

Пороги 0.1*φ, 0.1/φ та нестроге порівняння ширин підібрані емпірично
і мають залишатися саме такими.

Вироджений параболічний крок (NaN, нуль, |крок| < tol) замінюється на ±tol
лише для знака ratio і як параболічний крок не обирається.
"""

from __future__ import annotations

import logging

import numpy as np

from .bracket import Bracket, parabolic_step
from .constants import OptimizerConstants
from .errors import BudgetExceededError
from .evaluation_log import EvaluationLog

logger = logging.getLogger(__name__)


def max_interval_size(log: EvaluationLog, a: int, b: int, x: int, step) -> float:
    """Найбільша можлива ширина інтервалу після кроку step з точки x."""
    ux = log.x(x) + step
    return max(
        abs(log.x(a) - log.x(x)),
        abs(log.x(b) - log.x(x)),
        abs(ux - log.x(a)),
        abs(ux - log.x(b)),
    )


def brent_min(log: EvaluationLog, bracket: Bracket, constants: OptimizerConstants) -> int:
    """
    Знайти мінімум у дужці методом Брента.

    Returns
    -------
    int
        Індекс журналу для знайденої точки мінімуму.

    Raises
    ------
    BudgetExceededError
        Ліміт викликів вичерпано до збіжності. Часткового результату немає.
    """
    X, F = log.x, log.f
    phi = constants.phi
    phi_inv = constants.phi_inv
    phi_conj = constants.phi_conj

    if X(bracket.a) < X(bracket.c):
        a, b = bracket.a, bracket.c
    else:
        a, b = bracket.c, bracket.a
    x = w = v = bracket.b

    i = 0
    while True:
        xm = 0.5 * (X(a) + X(b))
        tol = constants.x_tolerance * abs(X(x)) + constants.abs_tolerance
        if abs(X(x) - xm) <= 2.0 * tol - 0.5 * (X(b) - X(a)):
            logger.debug("[%d] converged: x=F(%.16g)=%.16g", i, X(x), F(x))
            return x
        if F(a) == F(b) and F(a) == F(x):
            logger.debug("[%d] flat interval: x=F(%.16g)=%.16g", i, X(x), F(x))
            return x
        if log.exhausted:
            raise BudgetExceededError(
                f"brent_min: немає збіжності за {log.max_eval} викликів функції "
                f"(інтервал [{X(a)!r}, {X(b)!r}]).",
                max_eval=log.max_eval,
                n_evals=log.n_calls,
            )

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            pstep = parabolic_step(log, w, x, v, constants.eps)
            parabolic_ok = bool(np.isfinite(pstep)) and abs(pstep) >= tol
            if not parabolic_ok:
                pstep = -tol if np.signbit(pstep) else tol
            if X(x) >= xm:
                gstep = phi_conj * (X(a) - X(x))
                igstep = phi * (X(x) - X(b))
            else:
                gstep = phi_conj * (X(b) - X(x))
                igstep = phi * (X(x) - X(a))
            pmax_size = max_interval_size(log, a, b, x, pstep)
            gmax_size = max_interval_size(log, a, b, x, gstep)

            ratio = (X(x) - X(a)) / (X(b) - X(x))
            if pstep > 0:
                ratio = 1.0 / ratio

        logger.debug(
            "[%d] parabolic=%.16g (max_size=%.16g) golden=%.16g (max_size=%.16g) "
            "inv_golden=%.16g ratio=%.16g",
            i, pstep, pmax_size, gstep, gmax_size, igstep, ratio,
        )
        if ratio < 0.1 * phi:
            step, kind = igstep, "inv_golden"
        elif parabolic_ok and ratio > 0.1 * phi_inv and pmax_size <= gmax_size:
            step, kind = pstep, "parabolic"
        else:
            step, kind = gstep, "golden"
        if abs(step) < tol:
            step = step + np.copysign(tol, step)

        u = log.eval(X(x) + step)
        logger.debug("[%d] %s step=%.16g: u=F(%.16g)=%.16g", i, kind, step, X(u), F(u))

        if F(u) < F(x):
            if X(u) >= X(x):
                a = x
            else:
                b = x
            v, w, x = w, x, u
        else:
            if X(u) < X(x):
                a = u
            else:
                b = u
            if F(u) <= F(w) or X(w) == X(x):
                v, w = w, u
            elif F(u) <= F(v) or v == x or v == w:
                v = u
        i += 1


__all__ = [
    "max_interval_size",
    "brent_min",
]
