import pytest
import torch

from bzeval import BezierCurve, EvaluatorConfig, bernstein_basis, curve_2d, curve_3d


def _points_2d() -> torch.Tensor:
    return torch.tensor(
        [[0.0, 0.0], [0.5, 2.0], [1.5, -1.0], [3.0, 1.0], [4.0, 0.0]],
        dtype=torch.float64,
    )


def _points_3d() -> torch.Tensor:
    return torch.tensor(
        [[0.0, 0.0, 0.0], [1.0, 2.0, 0.5], [2.0, -1.0, 1.5], [3.0, 0.0, -1.0]],
        dtype=torch.float64,
    )


def test_bernstein_basis_is_a_partition_of_unity() -> None:
    t = torch.linspace(-0.5, 1.5, 9, dtype=torch.float64)
    basis = bernstein_basis(6, t)
    assert basis.shape == (9, 7)
    assert torch.allclose(basis.sum(dim=-1), torch.ones(9, dtype=torch.float64))


def test_bernstein_basis_uses_binomial_weights() -> None:
    basis = bernstein_basis(4, torch.tensor(0.5, dtype=torch.float64))
    expected = torch.tensor([1.0, 4.0, 6.0, 4.0, 1.0], dtype=torch.float64) / 16.0
    assert torch.equal(basis, expected)


@pytest.mark.parametrize("evaluator, points", [(curve_2d, _points_2d()), (curve_3d, _points_3d())])
def test_endpoints_are_interpolated(evaluator, points: torch.Tensor) -> None:
    assert torch.equal(evaluator(0.0, points), points[0])
    assert torch.equal(evaluator(1.0, points), points[-1])


@pytest.mark.parametrize("evaluator, point", [(curve_2d, [1.0, -2.0]), (curve_3d, [1.0, -2.0, 3.0])])
def test_single_point_is_constant(evaluator, point: list) -> None:
    for t in (-1.0, 0.0, 0.3, 1.0, 5.0):
        assert torch.equal(evaluator(t, [point]), torch.tensor(point, dtype=torch.float64))


def test_parameters_outside_unit_interval_extrapolate() -> None:
    point = curve_2d(2.0, [[0.0, 0.0], [1.0, 1.0]])
    assert torch.allclose(point, torch.tensor([2.0, 2.0], dtype=torch.float64))


@pytest.mark.parametrize(
    "evaluator, points, matrix",
    [
        (curve_2d, _points_2d(), [[2.0, -1.0], [0.5, 3.0]]),
        (curve_3d, _points_3d(), [[1.0, 0.5, 0.0], [-2.0, 1.0, 0.3], [0.0, 4.0, -1.0]]),
    ],
)
def test_affine_invariance(evaluator, points: torch.Tensor, matrix: list) -> None:
    matrix = torch.tensor(matrix, dtype=torch.float64)
    offset = torch.arange(1.0, points.shape[-1] + 1.0, dtype=torch.float64)
    t = torch.linspace(0.0, 1.0, 11, dtype=torch.float64)
    transformed_first = evaluator(t, points @ matrix.T + offset)
    transformed_after = evaluator(t, points) @ matrix.T + offset
    assert torch.allclose(transformed_first, transformed_after, atol=1e-12)


@pytest.mark.parametrize("evaluator, points", [(curve_2d, _points_2d()), (curve_3d, _points_3d())])
def test_reversed_points_mirror_the_parameter(evaluator, points: torch.Tensor) -> None:
    t = torch.linspace(0.0, 1.0, 11, dtype=torch.float64)
    assert torch.allclose(evaluator(t, points.flip(0)), evaluator(1.0 - t, points), atol=1e-12)


def test_high_degree_curve() -> None:
    # C(69, 34) does not fit in a 64-bit integer.
    points = [[i, i] for i in range(70)]
    assert torch.allclose(curve_2d(0.5, points), torch.tensor([34.5, 34.5], dtype=torch.float64))
    assert torch.equal(curve_2d(1.0, points), torch.tensor([69.0, 69.0], dtype=torch.float64))
    points_3d = [[i, 2 * i, -i] for i in range(80)]
    assert torch.allclose(curve_3d(0.25, points_3d), torch.tensor([19.75, 39.5, -19.75], dtype=torch.float64))
    assert torch.allclose(BezierCurve(points_3d).evaluate(0.25), curve_3d(0.25, points_3d))


def test_bernstein_basis_accepts_numbers() -> None:
    basis = bernstein_basis(3, 0.25)
    assert basis.dtype == torch.float64
    assert basis.shape == (4,)
    assert torch.allclose(basis.sum(), torch.tensor(1.0, dtype=torch.float64))


def test_sequence_of_tensor_points() -> None:
    points = [torch.tensor([0.0, 0.0]), torch.tensor([1.0, 2.0]), torch.tensor([2.0, 0.0])]
    point = curve_2d(0.5, points)
    assert point.dtype == torch.float32
    assert torch.allclose(point, torch.tensor([1.0, 1.0]))


def test_mixed_sequence_of_points() -> None:
    points = [torch.tensor([0, 0]), [1.0, 2.0], (2.0, 0.0)]
    point = curve_2d(0.5, points)
    assert point.dtype == torch.float64
    assert torch.allclose(point, torch.tensor([1.0, 1.0], dtype=torch.float64))


@pytest.mark.parametrize("evaluator, points", [(curve_2d, _points_2d()), (curve_3d, _points_3d())])
def test_unchecked_inputs_evaluate_identically(evaluator, points: torch.Tensor) -> None:
    t = torch.linspace(-0.5, 1.5, 9, dtype=torch.float64)
    unchecked = evaluator(t, points, config=EvaluatorConfig(check_inputs=False))
    assert torch.equal(unchecked, evaluator(t, points))


def test_config_controls_device() -> None:
    config = EvaluatorConfig(device=torch.device("cpu"))
    point = curve_3d(0.5, _points_3d(), config=config)
    assert point.device == torch.device("cpu")
    assert BezierCurve(_points_3d(), config=config).device == torch.device("cpu")


def test_bezier_curve_accepts_config() -> None:
    curve = BezierCurve([[0, 0], [2, 2]], config=EvaluatorConfig(dtype=torch.float32))
    assert curve.dtype == torch.float32
    assert torch.allclose(curve.evaluate(0.5), torch.tensor([1.0, 1.0]))
    with pytest.raises(ValueError):
        BezierCurve([[0, 0]], config=EvaluatorConfig(dtype=torch.int32))


def test_batched_parameters() -> None:
    t = torch.linspace(0.0, 1.0, 7, dtype=torch.float64)
    assert curve_2d(t, _points_2d()).shape == (7, 2)
    assert curve_3d(t, _points_3d()).shape == (7, 3)


def test_result_does_not_alias_input() -> None:
    points = torch.tensor([[1.0, 2.0]], dtype=torch.float64)
    point = curve_2d(0.5, points)
    point.add_(10.0)
    assert torch.equal(points, torch.tensor([[1.0, 2.0]], dtype=torch.float64))


def test_gradients_reach_control_points() -> None:
    points = _points_2d().requires_grad_(True)
    curve_2d(torch.tensor([0.2, 0.7], dtype=torch.float64), points).sum().backward()
    assert points.grad is not None
    assert torch.isfinite(points.grad).all()


def test_config_controls_dtype() -> None:
    point = curve_2d(0.5, [[0, 0], [2, 2]], config=EvaluatorConfig(dtype=torch.float32))
    assert point.dtype == torch.float32
    assert torch.allclose(point, torch.tensor([1.0, 1.0]))


def test_config_rejects_integer_dtype() -> None:
    with pytest.raises(ValueError):
        curve_2d(0.5, [[0, 0]], config=EvaluatorConfig(dtype=torch.int64))


def test_empty_sequence_is_rejected() -> None:
    with pytest.raises(ValueError):
        curve_2d(0.5, [])


def test_three_dimensional_curve_needs_three_coordinates() -> None:
    with pytest.raises(ValueError):
        curve_3d(0.5, [[0.0, 0.0], [1.0, 1.0]])


def test_bezier_curve_evaluate_matches_function() -> None:
    curve = BezierCurve(_points_3d())
    assert curve.degree == 3
    assert curve.dimension == 3
    t = torch.linspace(0.0, 1.0, 5, dtype=torch.float64)
    assert torch.allclose(curve.evaluate(t), curve_3d(t, _points_3d()))


def test_bezier_curve_sample_lengths() -> None:
    curve = BezierCurve(torch.tensor([[0.0, 0.0], [3.0, 4.0]], dtype=torch.float64))
    positions, lengths = curve.sample(6)
    assert positions.shape == (6, 2)
    assert lengths.shape == (6,)
    assert torch.allclose(lengths, torch.ones(6, dtype=torch.float64))


def test_bezier_curve_sample_without_endpoints() -> None:
    curve = BezierCurve(torch.tensor([[0.0, 0.0], [1.0, 0.0]], dtype=torch.float64))
    positions, _ = curve.sample(4, include_endpoints=False)
    expected = torch.tensor([0.125, 0.375, 0.625, 0.875], dtype=torch.float64)
    assert torch.allclose(positions[:, 0], expected)


def test_bezier_curve_validation() -> None:
    with pytest.raises(ValueError):
        BezierCurve(torch.zeros(0, 2))
    with pytest.raises(ValueError):
        BezierCurve(_points_2d()).sample(1)
