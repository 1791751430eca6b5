import numpy as np
import pytest

from admspacetime.adm import AdmState, ExtrinsicCurvature
from admspacetime.adm_grid import AdmGrid


def _coordinate_state(x, y, z):
    s = AdmState.flat()
    s.alpha = 1.0 + x
    s.beta = (x, y, z)
    s.k = ExtrinsicCurvature.from_flat(3, [x, y, 0.0, y, z, 0.0, 0.0, 0.0, x])
    return s


def test_flat_grid_holds_flat_data():
    grid = AdmGrid.flat(5, 6, 7, 0.1, 0.1, 0.1)
    assert grid.n_pts() == 5 * 6 * 7
    for ix, iy, iz in [(0, 0, 0), (2, 3, 4), (4, 5, 6)]:
        assert np.array_equal(grid.gamma_flat(ix, iy, iz), np.eye(3).ravel())
        assert np.array_equal(grid.k_flat(ix, iy, iz), np.zeros(9))
        assert grid.alpha_at(ix, iy, iz) == 1.0
        assert grid.beta_at(ix, iy, iz) == (0.0, 0.0, 0.0)


def test_build_evaluates_at_physical_coordinates():
    grid = AdmGrid.build(5, 5, 5, 0.5, 0.25, 2.0, 1.0, -1.0, 3.0, _coordinate_state)
    x, y, z = 1.0 + 3 * 0.5, -1.0 + 2 * 0.25, 3.0 + 4 * 2.0
    assert grid.beta_at(3, 2, 4) == pytest.approx((x, y, z))
    assert grid.alpha_at(3, 2, 4) == pytest.approx(1.0 + x)


def test_state_at_round_trip():
    grid = AdmGrid.build(5, 5, 5, 0.5, 0.5, 0.5, 0.0, 0.0, 0.0, _coordinate_state)
    expected = _coordinate_state(1.0, 1.5, 2.0)
    state = grid.state_at(2, 3, 4)
    assert np.allclose(state.gamma, expected.gamma)
    assert np.allclose(state.k.components, expected.k.components)
    assert state.alpha == pytest.approx(expected.alpha)
    assert state.beta == pytest.approx(expected.beta)


def test_flat_pt_is_bijective_and_z_innermost():
    grid = AdmGrid.flat(5, 6, 7, 0.1, 0.1, 0.1)
    indices = [
        grid.flat_pt(ix, iy, iz)
        for ix in range(grid.nx)
        for iy in range(grid.ny)
        for iz in range(grid.nz)
    ]
    assert indices == list(range(grid.n_pts()))
    assert grid.flat_pt(0, 0, 1) - grid.flat_pt(0, 0, 0) == 1


def test_minimum_grid_has_single_interior_point():
    grid = AdmGrid.flat(5, 5, 5, 0.1, 0.1, 0.1)
    interior = [
        (ix, iy, iz)
        for ix in range(5)
        for iy in range(5)
        for iz in range(5)
        if grid.is_interior(ix, iy, iz)
    ]
    assert interior == [(2, 2, 2)]


@pytest.mark.parametrize("shape", [(4, 5, 5), (5, 4, 5), (5, 5, 4)])
def test_grid_too_small_raises(shape):
    with pytest.raises(ValueError):
        AdmGrid.flat(*shape, 0.1, 0.1, 0.1)


def test_with_rhs_updates_only_interior_evolved_fields():
    grid = AdmGrid.flat(6, 6, 6, 0.1, 0.1, 0.1)
    rhs = np.ones_like(grid.fields)
    out = grid.with_rhs(rhs, 0.5)
    for ix in range(6):
        for iy in range(6):
            for iz in range(6):
                new = out.fields[ix, iy, iz]
                old = grid.fields[ix, iy, iz]
                if grid.is_interior(ix, iy, iz):
                    assert np.allclose(new[:18], old[:18] + 0.5)
                    assert np.array_equal(new[18:], old[18:])
                else:
                    assert np.array_equal(new, old)
    assert np.array_equal(grid.fields, AdmGrid.flat(6, 6, 6, 0.1, 0.1, 0.1).fields)


def test_with_rhs_wrong_size_raises():
    grid = AdmGrid.flat(5, 5, 5, 0.1, 0.1, 0.1)
    with pytest.raises(ValueError):
        grid.with_rhs(np.zeros(10), 1.0)