"""
Базовая статистика для сравнения прогонов: среднее, стандартное отклонение,
функция ошибок, нормальная CDF и t-тест Уэлча.
"""
import math
from dataclasses import dataclass, asdict
from typing import Sequence

import numpy as np

# Коэффициенты аппроксимации Абрамовица-Стегун (7.1.26)
A1 = 0.254829592
A2 = -0.284496736
A3 = 1.421413741
A4 = -1.453152027
A5 = 1.061405429
P = 0.3275911


@dataclass
class TTestResult:
    t_statistic: float
    df: float
    p_value: float

    @property
    def is_defined(self) -> bool:
        return not math.isnan(self.p_value)

    def to_dict(self) -> dict:
        return asdict(self)


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return float("nan")
    return float(np.mean(np.asarray(values, dtype=float)))


def std_dev(values: Sequence[float]) -> float:
    """
    Стандартное отклонение генеральной совокупности (ddof=0), без поправки Бесселя.
    """
    if len(values) == 0:
        return float("nan")
    return float(np.std(np.asarray(values, dtype=float)))


def erf(x: float) -> float:
    """
    Аппроксимация функции ошибок (Abramowitz & Stegun), точность ~1.5e-7.
    Нечётность erf(-x) = -erf(x) обеспечивается выносом знака.
    """
    sign = 1 if x >= 0 else -1
    x = abs(x)

    t = 1.0 / (1.0 + P * x)
    y = 1.0 - (((((A5 * t + A4) * t) + A3) * t + A2) * t + A1) * t * math.exp(-x * x)

    return sign * y


def normal_cdf(z: float) -> float:
    return 0.5 * (1 + erf(z / math.sqrt(2)))


def welch_t_test(sample_a: Sequence[float], sample_b: Sequence[float]) -> TTestResult:
    """
    t-тест Уэлча для выборок с разной дисперсией.

    Степени свободы - по формуле Уэлча-Саттертуэйта. p-value - двусторонняя
    НОРМАЛЬНАЯ аппроксимация 2 * (1 - CDF(|t|)), а не распределение Стьюдента,
    поэтому при малых df она занижена.
    Вырожденные входы (нулевая дисперсия, одно наблюдение) дают NaN, а не исключение.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        mean_a = np.float64(mean(sample_a))
        mean_b = np.float64(mean(sample_b))
        var_a = np.float64(std_dev(sample_a)) ** 2
        var_b = np.float64(std_dev(sample_b)) ** 2
        n_a = np.float64(len(sample_a))
        n_b = np.float64(len(sample_b))

        se_a = var_a / n_a
        se_b = var_b / n_b

        t_statistic = (mean_a - mean_b) / np.sqrt(se_a + se_b)

        df = (se_a + se_b) ** 2 / (se_a ** 2 / (n_a - 1) + se_b ** 2 / (n_b - 1))

    p_value = 2 * (1 - normal_cdf(abs(float(t_statistic))))

    return TTestResult(float(t_statistic), float(df), float(p_value))
