"""Tensor-product Bézier surfaces. / 张量积贝塞尔曲面。

A surface over an ``(n1 + 1) x (n2 + 1)`` grid of control points blends the grid with two independent Bernstein bases:
one of degree ``n1`` in ``t`` along the rows and one of degree ``n2`` in ``u`` along the columns. /
定义在 ``(n1 + 1) x (n2 + 1)`` 控制点网格上的曲面由两组独立的 Bernstein 基混合而成：沿行方向以 ``t`` 计算的 ``n1`` 阶基，以及沿列方向以 ``u`` 计算的 ``n2`` 阶基。
Both bases are computed once per evaluation, after which every control point receives the product of its two weights,
so the cost is ``O(n1 * n2)``. / 每次求值只计算一次两组基函数，随后每个控制点获得两者乘积作为权重，因此计算量为 ``O(n1 * n2)``。
Both grid sizes are read from the grid's own shape, so every row must have the same length.
/ 网格的两个尺寸均取自网格自身的形状，因此各行长度必须一致。
"""
from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass
from typing import Optional, Tuple

import torch

from .bezier import bernstein_basis
from .config import (
    EvaluatorConfig,
    TensorLike,
    as_parameter,
    as_points,
    check_points,
    resolve_config,
)

Tensor = torch.Tensor

logger = logging.getLogger(__name__)


def _blend_grid(basis1: Tensor, basis2: Tensor, points: Tensor) -> Tensor:
    """Weight each control point by ``basis1[p1] * basis2[p2]`` and sum. / 以 ``basis1[p1] * basis2[p2]`` 加权各控制点并求和。"""

    weights = basis1.unsqueeze(-1) * basis2.unsqueeze(-2)  # (..., n1 + 1, n2 + 1) shape / 张量形状
    return (weights.unsqueeze(-1) * points).sum(dim=(-3, -2))


def _surface(
    t: TensorLike, u: TensorLike, points: TensorLike, dimension: int, config: EvaluatorConfig | None
) -> Tensor:
    cfg = resolve_config(config)
    cp = as_points(points, cfg)
    check_points(cp, dimension, axes=2, config=cfg)
    t, u = torch.broadcast_tensors(as_parameter(t, cp), as_parameter(u, cp))
    n1 = cp.shape[-3] - 1
    n2 = cp.shape[-2] - 1
    return _blend_grid(bernstein_basis(n1, t), bernstein_basis(n2, u), cp[..., :dimension])


def surface_2d(
    t: TensorLike, u: TensorLike, points: TensorLike, *, config: EvaluatorConfig | None = None
) -> Tensor:
    """Evaluate a 2D tensor-product Bézier surface at ``(t, u)``. / 在 ``(t, u)`` 处计算二维张量积贝塞尔曲面。

    Parameters
    ----------
    t, u:
        Parameters along the rows and the columns of the grid; numbers or tensors that broadcast together.
        / 沿网格行方向与列方向的参数，可为数值或可相互广播的张量。
    points:
        Control point grid of shape ``(..., n1 + 1, n2 + 1, 2)``. / 形状为 ``(..., n1 + 1, n2 + 1, 2)`` 的控制点网格。
    """

    return _surface(t, u, points, 2, config)


def surface_3d(
    t: TensorLike, u: TensorLike, points: TensorLike, *, config: EvaluatorConfig | None = None
) -> Tensor:
    """Evaluate a 3D tensor-product Bézier surface at ``(t, u)``. / 在 ``(t, u)`` 处计算三维张量积贝塞尔曲面。"""

    return _surface(t, u, points, 3, config)


@dataclass
class BezierSurface:
    """Container for a grid of Bézier control points. / 存储贝塞尔控制点网格的容器。

    An optional ``config`` forces the dtype and device of the stored grid. / 可选的 ``config`` 用于指定网格的类型与设备。
    """

    control_points: Tensor  # (..., n1 + 1, n2 + 1, d) shape / 张量形状
    config: InitVar[Optional[EvaluatorConfig]] = None

    def __post_init__(self, config: Optional[EvaluatorConfig]) -> None:
        self.control_points = as_points(self.control_points, resolve_config(config))
        shape = tuple(self.control_points.shape)
        if len(shape) < 3 or 0 in shape[-3:-1]:
            logger.debug(f"Rejected BezierSurface control points with shape {shape}")
            raise ValueError(
                f"BezierSurface.control_points must have shape (..., n1 + 1, n2 + 1, d). Received {shape}"
            )

    @property
    def degree(self) -> Tuple[int, int]:
        return self.control_points.shape[-3] - 1, self.control_points.shape[-2] - 1

    @property
    def dimension(self) -> int:
        return self.control_points.shape[-1]

    @property
    def device(self) -> torch.device:
        return self.control_points.device

    @property
    def dtype(self) -> torch.dtype:
        return self.control_points.dtype

    def evaluate(self, t: TensorLike, u: TensorLike) -> Tensor:
        """Evaluate the surface at ``(t, u)``. / 计算曲面在 ``(t, u)`` 处的位置。"""

        cp = self.control_points
        t, u = torch.broadcast_tensors(as_parameter(t, cp), as_parameter(u, cp))
        n1, n2 = self.degree
        return _blend_grid(bernstein_basis(n1, t), bernstein_basis(n2, u), cp)

    def sample(self, rows: int, cols: int) -> Tensor:
        """Evaluate the surface on a regular ``(rows, cols)`` parameter grid. / 在规则的 ``(rows, cols)`` 参数网格上计算曲面。

        Row ``i`` uses ``t = i / (rows - 1)`` and column ``j`` uses ``u = j / (cols - 1)``; the result has shape
        ``(..., rows, cols, d)``. / 第 ``i`` 行取 ``t = i / (rows - 1)``，第 ``j`` 列取 ``u = j / (cols - 1)``；结果形状为 ``(..., rows, cols, d)``。
        """

        if rows < 2 or cols < 2:
            raise ValueError("rows and cols must be at least 2 to cover both parameter ends")

        n1, n2 = self.degree
        t_values = torch.linspace(0.0, 1.0, rows, device=self.device, dtype=self.dtype)
        u_values = torch.linspace(0.0, 1.0, cols, device=self.device, dtype=self.dtype)
        basis1 = bernstein_basis(n1, t_values)  # (rows, n1 + 1)
        basis2 = bernstein_basis(n2, u_values)  # (cols, n2 + 1)
        return torch.einsum("ip,jq,...pqd->...ijd", basis1, basis2, self.control_points)


__all__ = ["BezierSurface", "surface_2d", "surface_3d"]
