"""Sample a 3D Bézier surface and save its height field. / 采样三维贝塞尔曲面并保存其高度场。

Run the script with ``python examples/surface_heightmap.py``; it saves a grayscale PNG in ``examples`` where brighter
pixels are higher points of the surface. / 使用 ``python examples/surface_heightmap.py`` 运行脚本，会在 ``examples`` 目录保存灰度 PNG，
像素越亮表示曲面上的点越高。
"""
from __future__ import annotations

from pathlib import Path

import torch
from PIL import Image

from bzeval import BezierSurface, surface_3d

OUTPUT_PATH = Path(__file__).with_suffix(".png")


def make_hill_surface() -> BezierSurface:
    # A 4 x 4 bicubic grid with the four inner points raised. / 4 x 4 双三次网格，抬高中间四个控制点。
    heights = torch.tensor(
        [
            [0.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 0.6, 0.0],
            [0.0, 0.6, 1.0, 0.0],
            [0.0, 0.0, 0.0, 0.0],
        ],
        dtype=torch.float64,
    )
    axis = torch.linspace(0.0, 1.0, 4, dtype=torch.float64)
    grid_x, grid_y = torch.meshgrid(axis, axis, indexing="ij")
    return BezierSurface(torch.stack([grid_x, grid_y, heights], dim=-1))


def main() -> None:
    surface = make_hill_surface()
    positions = surface.sample(256, 256)
    z = positions[..., 2]
    z = (z - z.min()) / (z.max() - z.min())
    image_np = (z.cpu().numpy() * 255.0).astype("uint8")
    Image.fromarray(image_np).save(OUTPUT_PATH)
    peak = surface_3d(0.5, 0.5, surface.control_points)
    print(f"Saved height field to {OUTPUT_PATH}; centre point {peak.tolist()}")


if __name__ == "__main__":
    main()
