"""Bernstein basis and general-degree Bézier curves. / Bernstein 基函数与任意阶贝塞尔曲线。

A Bézier curve of degree ``n`` blends ``n + 1`` control points with the Bernstein polynomials
``C(n, p) (1 - t)^(n - p) t^p``. / ``n`` 阶贝塞尔曲线以 Bernstein 多项式 ``C(n, p) (1 - t)^(n - p) t^p`` 混合 ``n + 1`` 个控制点。
The binomial coefficients come from the recurrence ``C(n, p + 1) = C(n, p) (n - p) / (p + 1)`` so no factorial is ever formed
and the work stays linear in the degree. / 二项式系数由递推式 ``C(n, p + 1) = C(n, p) (n - p) / (p + 1)`` 得到，无需计算阶乘，计算量与阶数成线性关系。
All operations are implemented with PyTorch tensors so parameters may be batched and gradients flow through the control points.
/ 所有运算均以 PyTorch 张量实现，参数可以批量输入，梯度也能传递到控制点。
"""
from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass
from typing import Optional, Tuple

import torch

from .config import (
    DEFAULT_DTYPE,
    EvaluatorConfig,
    TensorLike,
    as_parameter,
    as_points,
    check_points,
    resolve_config,
)

Tensor = torch.Tensor

logger = logging.getLogger(__name__)


def bernstein_basis(degree: int, t: TensorLike) -> Tensor:
    """Evaluate all ``degree + 1`` Bernstein polynomials at ``t``. / 在 ``t`` 处计算全部 ``degree + 1`` 个 Bernstein 多项式。

    Returns a tensor of shape ``t.shape + (degree + 1,)``. Zero exponents evaluate to one, so ``t = 0`` and ``t = 1``
    select the first and last control point exactly. / 返回形状为 ``t.shape + (degree + 1,)`` 的张量。零次幂取值为 1，
    因此 ``t = 0`` 与 ``t = 1`` 恰好选中首尾控制点。
    """

    if not isinstance(t, Tensor):
        t = torch.as_tensor(t, dtype=DEFAULT_DTYPE)
    u = 1.0 - t
    values = []
    term = 1  # C(degree, p) as an exact integer, rounded to float once per use / 以精确整数保存，每次使用时取整为浮点数
    for p in range(degree + 1):
        values.append(float(term) * u ** (degree - p) * t ** p)
        term = term * (degree - p) // (p + 1)
    return torch.stack(values, dim=-1)


def _blend(basis: Tensor, points: Tensor) -> Tensor:
    # (..., n + 1) weights against (..., n + 1, d) points / 权重 (..., n + 1) 与控制点 (..., n + 1, d)
    return (basis.unsqueeze(-1) * points).sum(dim=-2)


def _curve(t: TensorLike, points: TensorLike, dimension: int, config: EvaluatorConfig | None) -> Tensor:
    cfg = resolve_config(config)
    cp = as_points(points, cfg)
    check_points(cp, dimension, axes=1, config=cfg)
    t = as_parameter(t, cp)
    return _blend(bernstein_basis(cp.shape[-2] - 1, t), cp[..., :dimension])


def curve_2d(t: TensorLike, points: TensorLike, *, config: EvaluatorConfig | None = None) -> Tensor:
    """Evaluate a 2D Bézier curve of any degree at ``t``. / 在 ``t`` 处计算任意阶二维贝塞尔曲线。

    Parameters
    ----------
    t:
        Curve parameter, a number or a tensor of shape ``(...,)``. Values outside ``[0, 1]`` extrapolate.
        / 曲线参数，可为数值或形状为 ``(...,)`` 的张量；超出 ``[0, 1]`` 的取值按多项式外推。
    points:
        ``n + 1`` control points, shape ``(..., n + 1, 2)``. Only coordinates 0 and 1 are read.
        / ``n + 1`` 个控制点，形状为 ``(..., n + 1, 2)``，只读取第 0 与第 1 个坐标。
    """

    return _curve(t, points, 2, config)


def curve_3d(t: TensorLike, points: TensorLike, *, config: EvaluatorConfig | None = None) -> Tensor:
    """Evaluate a 3D Bézier curve of any degree at ``t``. / 在 ``t`` 处计算任意阶三维贝塞尔曲线。"""

    return _curve(t, points, 3, config)


@dataclass
class BezierCurve:
    """Container for batches of Bézier control points of one degree. / 存储同阶贝塞尔控制点批次的容器。

    The control points follow the PyTorch layout ``(..., n + 1, d)`` with arbitrary batch dimensions.
    / 控制点遵循 PyTorch 的 ``(..., n + 1, d)`` 布局，可包含任意批次维度。
    An optional ``config`` forces the dtype and device of the stored points. / 可选的 ``config`` 用于指定控制点的类型与设备。
    """

    control_points: Tensor
    config: InitVar[Optional[EvaluatorConfig]] = None

    def __post_init__(self, config: Optional[EvaluatorConfig]) -> None:
        self.control_points = as_points(self.control_points, resolve_config(config))
        if self.control_points.dim() < 2 or self.control_points.shape[-2] == 0:
            logger.debug(f"Rejected BezierCurve control points with shape {tuple(self.control_points.shape)}")
            raise ValueError(
                "BezierCurve.control_points must have shape (..., n + 1, d) with at least one point. "
                f"Received {tuple(self.control_points.shape)}"
            )

    @property
    def degree(self) -> int:
        return self.control_points.shape[-2] - 1

    @property
    def dimension(self) -> int:
        return self.control_points.shape[-1]

    @property
    def device(self) -> torch.device:
        return self.control_points.device

    @property
    def dtype(self) -> torch.dtype:
        return self.control_points.dtype

    def evaluate(self, t: TensorLike) -> Tensor:
        """Evaluate positions along the curve for parameter ``t``. / 计算参数 ``t`` 对应的曲线上位置。"""

        t = as_parameter(t, self.control_points)
        return _blend(bernstein_basis(self.degree, t), self.control_points)

    def sample(self, num_samples: int, *, include_endpoints: bool = True) -> Tuple[Tensor, Tensor]:
        """Sample positions and approximate arc-length weights. / 采样曲线位置及相应的近似弧长权重。

        Positions have shape ``(num_samples, d)`` for a single curve. Each weight is the length of the chord
        ending at that sample; the first chord is replicated so both tensors line up.
        / 单条曲线的位置形状为 ``(num_samples, d)``。每个权重是以该采样点结尾的弦长，首段弦长被复制以保证两者长度一致。
        """

        if num_samples < 2:
            raise ValueError("num_samples must be at least 2 to estimate arc length")

        if include_endpoints:
            t_values = torch.linspace(0.0, 1.0, num_samples, device=self.device, dtype=self.dtype)
        else:
            # Offset by half a step so samples sit at segment centres. / 将采样点偏移半步，使其位于线段中心。
            step = 1.0 / num_samples
            t_values = torch.linspace(
                step / 2.0, 1.0 - step / 2.0, num_samples, device=self.device, dtype=self.dtype
            )

        basis = bernstein_basis(self.degree, t_values)  # (S, n + 1)
        positions = torch.einsum("sp,...pd->...sd", basis, self.control_points)
        deltas = positions[..., 1:, :] - positions[..., :-1, :]
        lengths = torch.linalg.norm(deltas, dim=-1)
        lengths = torch.cat([lengths[..., :1], lengths], dim=-1)
        return positions, lengths


__all__ = ["BezierCurve", "bernstein_basis", "curve_2d", "curve_3d"]
