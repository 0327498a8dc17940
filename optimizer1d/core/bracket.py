"""
bracket.py

Пошук дужки (bracket) для мінімуму одномірної функції.

Ідея:
    - стартуємо з двох різних точок xA, xB і рухаємося "вниз" від гіршої
      до кращої;
    - третю точку отримуємо кроком золотого перерізу;
    - поки f(b) не менше за f(c), екстраполюємо параболою через (a, b, c),
      обмежуючи крок max_search_ratio * (c - b), і зсуваємо трійку
      (при f(b) == f(c) точка a лишається на місці);
    - результат: індекси (a, b, c) журналу, де x(a) та x(c) лежать строго
      по різні боки від x(b), а f(b) < f(a), f(b) < f(c).

Усі точки - індекси в EvaluationLog, значення f у журналі вже
"мінімізуються" (знак для максимізації застосовано при обчисленні).
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np

from .constants import OptimizerConstants
from .errors import BracketInvariantError, DegenerateSeedError
from .evaluation_log import EvaluationLog

logger = logging.getLogger(__name__)


class Bracket(NamedTuple):
    """Трійка індексів журналу: середня точка b має найменше значення."""
    a: int
    b: int
    c: int


# ---------------------------------------------------------------------------
# Допоміжні кроки
# ---------------------------------------------------------------------------

def golden_step(log: EvaluationLog, alpha: int, beta: int, phi: float):
    """Крок золотого перерізу від alpha геть від beta: x(α) + φ (x(α) - x(β))."""
    return log.x(alpha) + phi * (log.x(alpha) - log.x(beta))


def parabolic_step(log: EvaluationLog, a: int, b: int, c: int, eps: float):
    """
    Зсув від x(b) до вершини параболи через три точки журналу.

    Модуль знаменника обмежено знизу значенням eps зі збереженням знака,
    тож для вироджених трійок (наприклад, a == b == c) повертається 0,
    а не NaN.
    """
    d1 = log.x(b) - log.x(a)
    d2 = log.x(b) - log.x(c)
    q1 = d1 * (log.f(b) - log.f(c))
    q2 = d2 * (log.f(b) - log.f(a))
    numer = d1 * q1 - d2 * q2
    denom = -2.0 * (q1 - q2)
    denom = np.copysign(max(abs(denom), eps), denom)
    return numer / denom


# ---------------------------------------------------------------------------
# Пошук дужки
# ---------------------------------------------------------------------------

def bracket_min(
    log: EvaluationLog,
    xA: float,
    xB: float,
    constants: OptimizerConstants,
) -> Bracket:
    """
    Знайти дужку для мінімуму, стартуючи з точок xA та xB.

    Raises
    ------
    DegenerateSeedError
        xA == xB або f(xA) == f(xB).
    BracketInvariantError
        Отримана трійка не є дужкою (помилка алгоритму).
    BudgetExceededError
        Вичерпано ліміт викликів функції під час пошуку.
    """
    if xA == xB:
        raise DegenerateSeedError(f"bracket_min: початкові точки однакові (x={xA!r}).")

    phi = constants.phi
    x, f = log.x, log.f

    a = log.eval(xA)
    b = log.eval(xB)
    if f(a) == f(b):
        raise DegenerateSeedError(
            f"bracket_min: однакові значення функції у початкових точках "
            f"F({xA!r})=F({xB!r})={f(a)!r}."
        )
    if f(b) > f(a):
        # Рухаємось вниз: f(a) > f(b)
        a, b = b, a
    c = log.eval(golden_step(log, b, a, phi))

    while not f(b) < f(c):
        ux = x(b) + parabolic_step(log, a, b, c, constants.eps)
        ux_limit = x(b) + constants.max_search_ratio * (x(c) - x(b))

        if (x(b) - ux) * (ux - x(c)) > 0:
            # ux між b та c
            u = log.eval(ux)
            logger.debug("ux=%.16g between b=%.16g and c=%.16g", ux, x(b), x(c))
            if f(u) < f(c):
                logger.debug("minimum bracketed between b and c")
                a, b = b, u
                break
            if f(u) > f(b):
                logger.debug("minimum bracketed between a and u")
                c = u
                break
            u = log.eval(golden_step(log, c, b, phi))
            logger.debug("parabolic step rejected, golden step F(%.16g)=%.16g", x(u), f(u))
        elif (x(c) - ux) * (ux - ux_limit) > 0:
            u = log.eval(ux)
            logger.debug("ux=%.16g between c=%.16g and limit=%.16g", ux, x(c), ux_limit)
        elif (ux - ux_limit) * (ux_limit - x(c)) >= 0:
            u = log.eval(ux_limit)
            logger.debug("ux past limit, clamped F(%.16g)=%.16g", x(u), f(u))
        else:
            u = log.eval(golden_step(log, c, b, phi))
            logger.debug("parabolic step points away, golden step F(%.16g)=%.16g", x(u), f(u))

        if f(b) == f(c):
            # a не зсуваємо: f(a) > f(b) має лишатися строгою
            b, c = c, u
        else:
            a, b, c = b, c, u
        logger.debug(
            "shift: a=F(%.16g)=%.16g b=F(%.16g)=%.16g c=F(%.16g)=%.16g",
            x(a), f(a), x(b), f(b), x(c), f(c),
        )

    bracket = Bracket(a, b, c)
    check_bracket(log, bracket)
    logger.debug(
        "bracket: A[F(%.16g)=%.16g] B[F(%.16g)=%.16g] C[F(%.16g)=%.16g]",
        x(a), f(a), x(b), f(b), x(c), f(c),
    )
    return bracket


def check_bracket(log: EvaluationLog, bracket: Bracket) -> None:
    """Перевірити впорядкування дужки за x та за f."""
    a, b, c = bracket
    x, f = log.x, log.f
    if (x(a) >= x(b) and x(c) >= x(b)) or (x(a) <= x(b) and x(c) <= x(b)):
        raise BracketInvariantError(
            f"bracket_min: значення x дужки не впорядковані "
            f"({x(a)!r}, {x(b)!r}, {x(c)!r})."
        )
    if not (f(a) > f(b) and f(c) > f(b)):
        raise BracketInvariantError(
            f"bracket_min: значення f дужки не впорядковані "
            f"({f(a)!r}, {f(b)!r}, {f(c)!r})."
        )


__all__ = [
    "Bracket",
    "golden_step",
    "parabolic_step",
    "bracket_min",
    "check_bracket",
]
