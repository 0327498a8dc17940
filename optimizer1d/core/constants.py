"""
constants.py

Незмінні сталі одного екземпляра оптимізатора.

Ідея:
    - золотий перетин φ та похідні від нього коефіцієнти;
    - допуски за x, що залежать від машинного епсилон обраного типу
      (numpy.float64 або numpy.float32);
    - максимальне відношення екстраполяції при пошуку дужки.

Сталі зберігаються у frozen-dataclass і створюються для кожного екземпляра
окремо, тож кілька оптимізаторів ніколи не ділять змінного стану.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite, sqrt
from typing import Any, Dict, Optional

import numpy as np

GOLDEN_RATIO = (1.0 + sqrt(5.0)) / 2.0

# Частка від x_tolerance, яка використовується як абсолютна нижня межа
# допуску методу Брента (для точок поблизу нуля).
ABS_TOLERANCE_SCALE = 1e-3

MAX_SEARCH_RATIO = 100.0

# Ключі, які можна перевизначити через options
OPTION_KEYS = ("x_tolerance", "abs_tolerance", "max_search_ratio")


@dataclass(frozen=True)
class OptimizerConstants:
    """
    Сталі алгоритмів.

    Атрибути:
        phi               - золотий перетин φ ≈ 1.618;
        phi_inv           - 1/φ ≈ 0.618;
        phi_conj          - 1 - 1/φ ≈ 0.382;
        eps               - машинне епсилон для dtype;
        x_tolerance       - відносний допуск за x, sqrt(eps);
        abs_tolerance     - абсолютна добавка до допуску Брента;
        max_search_ratio  - максимальний коефіцієнт параболічної екстраполяції
                            при пошуку дужки;
        dtype             - тип чисел журналу обчислень.
    """
    phi: float
    phi_inv: float
    phi_conj: float
    eps: float
    x_tolerance: float
    abs_tolerance: float
    max_search_ratio: float
    dtype: Any = np.float64

    @classmethod
    def for_dtype(cls, dtype: Any = np.float64, **overrides: Any) -> "OptimizerConstants":
        """
        Побудувати сталі для заданого типу чисел з плаваючою комою.

        overrides можуть містити x_tolerance, abs_tolerance, max_search_ratio.
        """
        dtype = np.dtype(dtype).type
        if dtype not in (np.float32, np.float64):
            raise ValueError(
                f"OptimizerConstants: підтримуються лише float32 та float64, отримано {dtype!r}."
            )

        unknown = set(overrides) - set(OPTION_KEYS)
        if unknown:
            raise ValueError(
                f"OptimizerConstants: невідомі параметри {sorted(unknown)}."
            )

        eps = float(np.finfo(dtype).eps)
        x_tolerance = _positive(overrides.get("x_tolerance"), sqrt(eps), "x_tolerance")
        abs_tolerance = _positive(
            overrides.get("abs_tolerance"),
            ABS_TOLERANCE_SCALE * x_tolerance,
            "abs_tolerance",
        )
        max_search_ratio = _positive(
            overrides.get("max_search_ratio"), MAX_SEARCH_RATIO, "max_search_ratio"
        )

        return cls(
            phi=GOLDEN_RATIO,
            phi_inv=1.0 / GOLDEN_RATIO,
            phi_conj=1.0 - 1.0 / GOLDEN_RATIO,
            eps=eps,
            x_tolerance=x_tolerance,
            abs_tolerance=abs_tolerance,
            max_search_ratio=max_search_ratio,
            dtype=dtype,
        )

    @classmethod
    def from_options(
        cls,
        dtype: Any = np.float64,
        options: Optional[Dict[str, Any]] = None,
    ) -> "OptimizerConstants":
        options = options or {}
        return cls.for_dtype(dtype, **{k: v for k, v in options.items() if v is not None})


def _positive(value: Optional[Any], default: float, name: str) -> float:
    if value is None:
        return default
    value = float(value)
    if not isfinite(value) or value <= 0.0:
        raise ValueError(
            f"OptimizerConstants: {name} повинен бути скінченним додатним числом, отримано {value!r}."
        )
    return value


__all__ = [
    "GOLDEN_RATIO",
    "MAX_SEARCH_RATIO",
    "OptimizerConstants",
]
