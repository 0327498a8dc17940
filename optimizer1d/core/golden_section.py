"""
golden_section.py

Метод золотого перерізу для уточнення мінімуму всередині дужки.

Припущення:
    - дужка (a, b, d) вже перевірена: f(b) < f(a), f(b) < f(d);
    - функція унімодальна між x(a) та x(d).

Ідея:
    - у більший з підінтервалів [a, b] / [b, d] ставимо нову точку з
      коефіцієнтом 1 - 1/φ, отримуємо чотири впорядковані точки a, b, c, d;
    - порівнюємо f(b) і f(c) та відкидаємо крайню точку з гіршого боку,
      зберігаючи одну з внутрішніх точок;
    - довжина інтервалу зменшується геометрично (у 1/φ разів за виклик).

Метод повільніший за метод Брента, але не залежить від гладкості функції.
"""

from __future__ import annotations

import logging

from .bracket import Bracket
from .constants import OptimizerConstants
from .evaluation_log import EvaluationLog

logger = logging.getLogger(__name__)


def golden_min(log: EvaluationLog, bracket: Bracket, constants: OptimizerConstants) -> int:
    """
    Уточнити мінімум у дужці методом золотого перерізу.

    Зупинка:
        - f(b) == f(c);
        - |x(d) - x(a)| <= x_tolerance * (|x(b)| + |x(c)|);
        - вичерпано ліміт викликів (повертається краща з внутрішніх точок).

    Returns
    -------
    int
        Індекс журналу для кращої з двох внутрішніх точок.
    """
    x, f = log.x, log.f
    phi_inv = constants.phi_inv
    phi_conj = constants.phi_conj

    a, b, d = bracket
    if abs(x(a) - x(b)) < abs(x(b) - x(d)):
        c = log.eval(x(b) + phi_conj * (x(d) - x(b)))
    else:
        c = b
        b = log.eval(x(c) + phi_conj * (x(a) - x(c)))

    while abs(x(d) - x(a)) > constants.x_tolerance * (abs(x(b)) + abs(x(c))):
        if log.exhausted:
            logger.warning(
                "golden_min: evaluation budget of %d exhausted, interval [%.16g, %.16g]",
                log.max_eval, x(a), x(d),
            )
            break
        if f(c) == f(b):
            break
        if f(c) < f(b):
            u = log.eval(phi_inv * x(c) + phi_conj * x(d))
            a, b, c = b, c, u
        else:
            u = log.eval(phi_inv * x(b) + phi_conj * x(a))
            d, c, b = c, b, u
        logger.debug(
            "golden: a=%.16g b=F(%.16g)=%.16g c=F(%.16g)=%.16g d=%.16g",
            x(a), x(b), f(b), x(c), f(c), x(d),
        )

    return b if f(b) <= f(c) else c


__all__ = ["golden_min"]
