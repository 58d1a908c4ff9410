"""Configuration shared by every evaluator. / 所有求值函数共享的配置。

Evaluation is stateless, so the only knobs are how inputs become tensors and whether they are checked first. /
求值过程无状态，因此仅需配置输入如何转换为张量以及是否预先检查输入。
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Optional, Sequence, Union

import torch

Tensor = torch.Tensor
TensorLike = Union[Tensor, float, Sequence]

logger = logging.getLogger(__name__)

DEFAULT_DTYPE = torch.float64


@dataclass
class EvaluatorConfig:
    """Options controlling tensor conversion and input checks. / 控制张量转换与输入检查的选项。

    ``dtype`` and ``device`` default to ``None``: floating tensors keep their own dtype and device,
    everything else becomes ``float64``. / ``dtype`` 与 ``device`` 默认为 ``None``：浮点张量保留自身的类型与设备，其余输入转换为 ``float64``。
    ``check_inputs`` turns on descriptive ``ValueError`` messages for malformed control points.
    / ``check_inputs`` 开启后，对格式错误的控制点给出明确的 ``ValueError``。
    """

    dtype: Optional[torch.dtype] = None
    device: Optional[torch.device] = None
    check_inputs: bool = True

    def validate(self) -> None:
        if self.dtype is not None and not self.dtype.is_floating_point:
            raise ValueError(f"EvaluatorConfig.dtype must be a floating dtype, got {self.dtype}")


DEFAULT_CONFIG = EvaluatorConfig()


def resolve_config(config: EvaluatorConfig | None) -> EvaluatorConfig:
    if config is None:
        return DEFAULT_CONFIG
    config.validate()
    return config


def _holds_tensor(points: TensorLike) -> bool:
    if isinstance(points, Tensor):
        return True
    if isinstance(points, (list, tuple)):
        return any(_holds_tensor(item) for item in points)
    return False


def as_points(points: TensorLike, config: EvaluatorConfig) -> Tensor:
    """Convert control points to a floating tensor. / 将控制点转换为浮点张量。

    Sequences holding tensors (nested ones for grids) are converted item by item and stacked.
    / 含有张量的序列（网格则为嵌套序列）会逐项转换后再堆叠。
    """

    if isinstance(points, Tensor):
        dtype = config.dtype or (points.dtype if points.is_floating_point() else DEFAULT_DTYPE)
        return points.to(device=config.device or points.device, dtype=dtype)
    if isinstance(points, (list, tuple)) and _holds_tensor(points):
        items = [as_points(item, config) for item in points]
        dtype = reduce(torch.promote_types, (item.dtype for item in items))
        device = items[0].device
        return torch.stack([item.to(device=device, dtype=dtype) for item in items])
    return torch.as_tensor(points, dtype=config.dtype or DEFAULT_DTYPE, device=config.device)


def as_parameter(t: TensorLike, like: Tensor) -> Tensor:
    """Match a curve parameter to the dtype and device of ``like``. / 使曲线参数与 ``like`` 的类型和设备一致。"""

    return torch.as_tensor(t, dtype=like.dtype, device=like.device)


def check_points(points: Tensor, dimension: int, axes: int, config: EvaluatorConfig) -> None:
    """Reject control points an evaluator cannot index. / 拒绝求值函数无法索引的控制点。

    ``axes`` is the number of point axes in front of the coordinates: 1 for curves, 2 for surface grids.
    / ``axes`` 为坐标轴之前的控制点轴数：曲线为 1，曲面网格为 2。
    """

    if not config.check_inputs:
        return
    kind = "grid" if axes == 2 else "sequence"
    if points.dim() < axes + 1:
        logger.debug(f"Rejected control point {kind} with shape {tuple(points.shape)}")
        raise ValueError(
            f"Control point {kind} must have shape (..., {'n1 + 1, n2 + 1' if axes == 2 else 'n + 1'}, {dimension}). "
            f"Received {tuple(points.shape)}"
        )
    if any(size == 0 for size in points.shape[-axes - 1:-1]):
        logger.debug(f"Rejected empty control point {kind} with shape {tuple(points.shape)}")
        raise ValueError(f"Control point {kind} must contain at least one point")
    if points.shape[-1] < dimension:
        logger.debug(f"Rejected {points.shape[-1]}-coordinate points for a {dimension}D evaluator")
        raise ValueError(
            f"Control points need at least {dimension} coordinates, got {points.shape[-1]}"
        )


__all__ = ["EvaluatorConfig", "as_parameter", "as_points", "check_points", "resolve_config"]
