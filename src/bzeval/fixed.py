"""Closed-form Bézier curves of degree two to six. / 二阶至六阶贝塞尔曲线的闭式求值。

Each evaluator expands the Bernstein blend with its row of Pascal's triangle written out, sharing the powers of
``t`` and ``u = 1 - t``. / 每个求值函数都直接展开 Bernstein 混合式并写出对应的帕斯卡三角行，复用 ``t`` 与 ``u = 1 - t`` 的各次幂。
Points are read in 2D: coordinates 0 and 1. / 控制点按二维读取：第 0 与第 1 个坐标。
"""
from __future__ import annotations

from typing import Tuple

import torch

from .config import EvaluatorConfig, TensorLike, as_parameter, as_points, check_points, resolve_config

Tensor = torch.Tensor


def _prepare(
    t: TensorLike, points: Tuple[TensorLike, ...], config: EvaluatorConfig | None
) -> Tuple[Tensor, Tuple[Tensor, ...]]:
    cfg = resolve_config(config)
    converted = []
    for point in points:
        p = as_points(point, cfg)
        check_points(p[None], 2, axes=1, config=cfg)
        converted.append(p[..., :2])
    t = as_parameter(t, converted[0]).unsqueeze(-1)  # (..., 1) shape / 张量形状 (..., 1)
    return t, tuple(converted)


def curve_quadratic(
    t: TensorLike,
    point1: TensorLike,
    point2: TensorLike,
    point3: TensorLike,
    *,
    config: EvaluatorConfig | None = None,
) -> Tensor:
    """Quadratic Bézier curve, coefficients 1, 2, 1. / 二次贝塞尔曲线，系数 1, 2, 1。"""

    t, (p1, p2, p3) = _prepare(t, (point1, point2, point3), config)
    u = 1.0 - t

    a = u * u
    b = 2 * u * t
    c = t * t

    return a * p1 + b * p2 + c * p3


def curve_cubic(
    t: TensorLike,
    point1: TensorLike,
    point2: TensorLike,
    point3: TensorLike,
    point4: TensorLike,
    *,
    config: EvaluatorConfig | None = None,
) -> Tensor:
    """Cubic Bézier curve, coefficients 1, 3, 3, 1. / 三次贝塞尔曲线，系数 1, 3, 3, 1。"""

    t, (p1, p2, p3, p4) = _prepare(t, (point1, point2, point3, point4), config)
    u = 1.0 - t

    a = u * u * u
    b = 3 * u * u * t
    c = 3 * u * t * t
    d = t * t * t

    return a * p1 + b * p2 + c * p3 + d * p4


def curve_quartic(
    t: TensorLike,
    point1: TensorLike,
    point2: TensorLike,
    point3: TensorLike,
    point4: TensorLike,
    point5: TensorLike,
    *,
    config: EvaluatorConfig | None = None,
) -> Tensor:
    """Quartic Bézier curve, coefficients 1, 4, 6, 4, 1. / 四次贝塞尔曲线，系数 1, 4, 6, 4, 1。"""

    t, (p1, p2, p3, p4, p5) = _prepare(t, (point1, point2, point3, point4, point5), config)
    u = 1.0 - t
    u2 = u * u
    t2 = t * t

    a = u2 * u2
    b = 4 * u * u2 * t
    c = 6 * u2 * t2
    d = 4 * u * t2 * t
    e = t2 * t2

    return a * p1 + b * p2 + c * p3 + d * p4 + e * p5


def curve_quintic(
    t: TensorLike,
    point1: TensorLike,
    point2: TensorLike,
    point3: TensorLike,
    point4: TensorLike,
    point5: TensorLike,
    point6: TensorLike,
    *,
    config: EvaluatorConfig | None = None,
) -> Tensor:
    """Quintic Bézier curve, coefficients 1, 5, 10, 10, 5, 1. / 五次贝塞尔曲线，系数 1, 5, 10, 10, 5, 1。"""

    t, (p1, p2, p3, p4, p5, p6) = _prepare(t, (point1, point2, point3, point4, point5, point6), config)
    u = 1.0 - t
    u2 = u * u
    t2 = t * t

    a = u2 * u2 * u
    b = 5 * u2 * u2 * t
    c = 10 * u * u2 * t2
    d = 10 * u2 * t2 * t
    e = 5 * u * t2 * t2
    f = t2 * t2 * t

    return a * p1 + b * p2 + c * p3 + d * p4 + e * p5 + f * p6


def curve_sextic(
    t: TensorLike,
    point1: TensorLike,
    point2: TensorLike,
    point3: TensorLike,
    point4: TensorLike,
    point5: TensorLike,
    point6: TensorLike,
    point7: TensorLike,
    *,
    config: EvaluatorConfig | None = None,
) -> Tensor:
    """Sextic Bézier curve, coefficients 1, 6, 15, 20, 15, 6, 1. / 六次贝塞尔曲线，系数 1, 6, 15, 20, 15, 6, 1。"""

    t, (p1, p2, p3, p4, p5, p6, p7) = _prepare(
        t, (point1, point2, point3, point4, point5, point6, point7), config
    )
    u = 1.0 - t
    u2 = u * u
    t2 = t * t

    a = u2 * u2 * u2
    b = 6 * u2 * u2 * u * t
    c = 15 * u2 * u2 * t2
    d = 20 * u * u2 * t2 * t
    e = 15 * u2 * t2 * t2
    f = 6 * u * t2 * t2 * t
    g = t2 * t2 * t2

    return a * p1 + b * p2 + c * p3 + d * p4 + e * p5 + f * p6 + g * p7


__all__ = ["curve_cubic", "curve_quadratic", "curve_quartic", "curve_quintic", "curve_sextic"]
