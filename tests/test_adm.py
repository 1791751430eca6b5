import numpy as np
import pytest

from admspacetime.adm import AdmState, ExtrinsicCurvature


def identity3():
    return np.eye(3)


def test_extrinsic_curvature_trace_flat():
    k = ExtrinsicCurvature.from_flat(3, [1.0, 0.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0, 3.0])
    assert abs(k.trace(identity3()) - 6.0) < 1e-14


def test_extrinsic_curvature_raise_first():
    k = ExtrinsicCurvature.from_flat(3, [1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0])
    k_up = k.raise_first(identity3())
    for i in range(3):
        for j in range(3):
            expected = 1.0 if i == j else 0.0
            assert abs(k_up[i, j] - expected) < 1e-14


def test_adm_state_flat():
    s = AdmState.flat()
    for i in range(3):
        for j in range(3):
            expected = 1.0 if i == j else 0.0
            assert s.gamma[i, j] == expected
    assert np.all(s.k.components == 0.0)
    assert s.alpha == 1.0
    assert s.beta == (0.0, 0.0, 0.0)


def test_gamma_inv_flat():
    g_inv = AdmState.flat().gamma_inv()
    for i in range(3):
        for j in range(3):
            expected = 1.0 if i == j else 0.0
            assert abs(g_inv[i, j] - expected) < 1e-12


def test_gamma_inv_is_inverse():
    state = AdmState.flat()
    state.gamma = np.array([[2.0, 0.3, 0.0], [0.3, 1.5, 0.1], [0.0, 0.1, 1.0]])
    assert np.allclose(state.gamma @ state.gamma_inv(), np.eye(3))


def test_gamma_inv_singular_raises():
    state = AdmState.flat()
    state.gamma = np.array([[1.0, 2.0, 0.0], [2.0, 4.0, 0.0], [0.0, 0.0, 1.0]])
    with pytest.raises(ValueError, match="singular"):
        state.gamma_inv()


def test_extrinsic_curvature_must_be_symmetric():
    with pytest.raises(ValueError, match="symmetric"):
        ExtrinsicCurvature.from_flat(3, [0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0])


def test_extrinsic_curvature_wrong_length_raises():
    with pytest.raises(ValueError, match="Expected 9 components"):
        ExtrinsicCurvature(3, [0.0] * 8)


def test_component_reads_row_major():
    k = ExtrinsicCurvature.from_flat(3, [1.0, 4.0, 5.0, 4.0, 2.0, 6.0, 5.0, 6.0, 3.0])
    assert k.component(0, 2) == 5.0
    assert k.component(2, 1) == 6.0
    assert k.component(1, 1) == 2.0


def test_trace_dimension_mismatch_raises():
    k = ExtrinsicCurvature.from_flat(3, [0.0] * 9)
    with pytest.raises(ValueError, match="Dimension mismatch"):
        k.trace(np.eye(2))


def test_trace_matches_trace_of_raised():
    k = ExtrinsicCurvature.from_flat(3, [1.0, 0.2, 0.0, 0.2, 2.0, 0.1, 0.0, 0.1, 3.0])
    g_inv = np.array([[1.0, 0.1, 0.0], [0.1, 2.0, 0.0], [0.0, 0.0, 0.5]])
    raised_diagonal_sum = np.diag(np.asarray(k.raise_first(g_inv))).sum()
    assert np.isclose(k.trace(g_inv), raised_diagonal_sum)