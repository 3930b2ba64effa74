"""
표준 정규분포 누적분포함수 근사

Abramowitz & Stegun 7.1.26 오차함수 근사식 (최대 오차 1.5e-7)
"""
import math

A1 = 0.254829592
A2 = -0.284496736
A3 = 1.421413741
A4 = -1.453152027
A5 = 1.061405429
P = 0.3275911


def normal_cdf(x: float) -> float:
    """
    Φ(x) 근사값

    Args:
        x: 표준 정규분포 상의 값

    Returns:
        (0, 1) 범위의 누적 확률. Φ(0) ≈ 0.5, Φ(1) ≈ 0.8413
    """
    sign = -1 if x < 0 else 1
    abs_x = abs(x) / math.sqrt(2.0)

    # erf(abs_x) 근사
    t = 1.0 / (1.0 + P * abs_x)
    y = 1.0 - (((((A5 * t + A4) * t) + A3) * t + A2) * t + A1) * t * math.exp(-abs_x * abs_x)

    return 0.5 * (1.0 + sign * y)
