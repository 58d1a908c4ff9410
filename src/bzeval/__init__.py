"""Bézier curve and surface evaluation on PyTorch tensors. / 基于 PyTorch 张量的贝塞尔曲线与曲面求值。

The package evaluates Bézier curves of any degree in 2D and 3D, closed-form curves of degree two to six, and
tensor-product Bézier surfaces. / 本包可计算二维与三维任意阶贝塞尔曲线、二阶至六阶闭式曲线以及张量积贝塞尔曲面。
Every evaluator is a pure function: control points are only read, and each call returns a fresh tensor. /
所有求值函数均为纯函数：只读取控制点，每次调用返回新的张量。
"""

from .bezier import BezierCurve, bernstein_basis, curve_2d, curve_3d
from .config import EvaluatorConfig
from .fixed import curve_cubic, curve_quadratic, curve_quartic, curve_quintic, curve_sextic
from .surface import BezierSurface, surface_2d, surface_3d

__all__ = [
    "BezierCurve",
    "BezierSurface",
    "EvaluatorConfig",
    "bernstein_basis",
    "curve_2d",
    "curve_3d",
    "curve_cubic",
    "curve_quadratic",
    "curve_quartic",
    "curve_quintic",
    "curve_sextic",
    "surface_2d",
    "surface_3d",
]
