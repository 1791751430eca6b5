import numpy as np
import pytest

from admspacetime.christoffel_derivative import ChristoffelDerivative


def sphere_values():
    values = [0.0] * 16
    values[6] = 1.0
    values[10] = -1.0
    values[12] = -1.0
    return values


def test_component_follows_row_major_layout():
    d = ChristoffelDerivative.from_flat(2, sphere_values())
    assert d.component(0, 1, 1, 0) == 1.0
    assert d.component(1, 0, 1, 0) == -1.0
    assert d.component(1, 1, 0, 0) == -1.0
    assert d.component(0, 0, 0, 0) == 0.0


def test_flat_round_trip():
    values = sphere_values()
    d = ChristoffelDerivative(2, values)
    assert d.components.ravel().tolist() == values
    assert d.dim == 2


def test_symmetry_in_lower_indices_holds():
    rng = np.random.default_rng(3)
    raw = rng.normal(size=(3, 3, 3, 3))
    sym = 0.5 * (raw + raw.transpose(0, 2, 1, 3))
    d = ChristoffelDerivative.from_flat(3, sym.ravel())
    for rho in range(3):
        for kappa in range(3):
            for mu in range(3):
                for nu in range(3):
                    assert d.component(rho, kappa, mu, nu) == d.component(
                        rho, mu, kappa, nu
                    )


def test_wrong_component_count_raises():
    with pytest.raises(ValueError, match="Expected 16 components"):
        ChristoffelDerivative(2, [0.0] * 15)


def test_asymmetry_raises():
    values = [0.0] * 16
    values[10] = -1.0  # [1,0,1,0] without its [1,1,0,0] partner
    with pytest.raises(ValueError, match="must satisfy"):
        ChristoffelDerivative.from_flat(2, values)


def test_input_is_copied():
    values = np.array(sphere_values())
    d = ChristoffelDerivative(2, values)
    values[6] = 5.0
    assert d.component(0, 1, 1, 0) == 1.0