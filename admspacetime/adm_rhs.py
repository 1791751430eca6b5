"""Right-hand sides of the vacuum ADM evolution equations and the constraints."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from admspacetime.adm import AdmState, ExtrinsicCurvature
from admspacetime.christoffel import Christoffel


@dataclass
class AdmRhs:
    """Time derivatives ∂_t γ_{ij} and ∂_t K_{ij} at one point."""

    dgamma_dt: ExtrinsicCurvature
    dk_dt: ExtrinsicCurvature


def _square(name: str, value, dim: int = 3) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.ndim == 1 and arr.size == dim * dim:
        arr = arr.reshape((dim, dim))
    if arr.shape != (dim, dim):
        raise ValueError(f"{name} must have shape ({dim}, {dim}), got {arr.shape}")
    return arr


def _vector(name: str, value, dim: int = 3) -> np.ndarray:
    arr = np.asarray(value, dtype=float).ravel()
    if arr.size != dim:
        raise ValueError(f"{name} must have {dim} components, got {arr.size}")
    return arr


def _connection(christoffel) -> np.ndarray:
    if isinstance(christoffel, Christoffel):
        arr = np.asarray(christoffel.components, dtype=float)
    else:
        arr = np.asarray(christoffel, dtype=float)
    if arr.size != 27:
        raise ValueError(f"Christoffel symbols must have 27 components, got {arr.size}")
    return arr.reshape((3, 3, 3))


def _symmetrize(a: np.ndarray) -> np.ndarray:
    return 0.5 * (a + a.T)


def _check_state_dim(state: AdmState) -> None:
    if state.gamma.shape != (3, 3) or state.k.dim != 3:
        raise ValueError("ADM right-hand sides expect a 3-dimensional spatial slice")


def adm_rhs_geodesic(state: AdmState, gamma_inv, ricci_3d) -> AdmRhs:
    """Vacuum ADM right-hand sides under geodesic slicing (α = 1, β = 0).

    ∂_t γ_{ij} = −2 K_{ij};  ∂_t K_{ij} = R_{ij} + K K_{ij} − 2 K_{ik} K^k_j.
    The lapse and shift stored in ``state`` are ignored.
    """
    _check_state_dim(state)
    gamma_inv = _square("gamma_inv", gamma_inv)
    ricci = _square("ricci_3d", ricci_3d)

    k = state.k.components
    k_trace = state.k.trace(gamma_inv)
    k_mixed = state.k.raise_first(gamma_inv)

    dgamma = -2.0 * k
    dk = ricci + k_trace * k - 2.0 * (k @ k_mixed)

    return AdmRhs(
        dgamma_dt=ExtrinsicCurvature(3, _symmetrize(dgamma)),
        dk_dt=ExtrinsicCurvature(3, _symmetrize(dk)),
    )


def adm_rhs_vacuum(
    state: AdmState,
    gamma_inv,
    ricci_3d,
    christoffel,
    d_alpha,
    d2_alpha,
    d_beta,
    d_k,
) -> AdmRhs:
    """Vacuum ADM right-hand sides for arbitrary lapse and shift.

    ``d_alpha[k]`` = ∂_k α, ``d2_alpha[i][j]`` = ∂_i ∂_j α,
    ``d_beta[i][k]`` = ∂_k β^i and ``d_k`` holds ∂_k K_{ij} flat as
    ``[i*9 + j*3 + k]`` (or as an array indexed ``[i, j, k]``).
    """
    _check_state_dim(state)
    gamma_inv = _square("gamma_inv", gamma_inv)
    ricci = _square("ricci_3d", ricci_3d)
    gamma_sym = _connection(christoffel)
    d_alpha = _vector("d_alpha", d_alpha)
    d2_alpha = _square("d2_alpha", d2_alpha)
    d_beta = _square("d_beta", d_beta)
    d_k_arr = np.asarray(d_k, dtype=float)
    if d_k_arr.size != 27:
        raise ValueError(f"d_k must have 27 components, got {d_k_arr.size}")
    d_k_arr = d_k_arr.reshape((3, 3, 3))

    alpha = float(state.alpha)
    beta = np.asarray(state.beta, dtype=float)
    gamma = state.gamma
    k = state.k.components

    k_trace = state.k.trace(gamma_inv)
    k_mixed = state.k.raise_first(gamma_inv)

    beta_lower = gamma @ beta
    # ∇_i β_j ≈ γ_{jl} ∂_i β^l − Γ^k_{ij} β_k
    d_beta_lower = np.einsum("jl,li->ij", gamma, d_beta)
    cov_beta = d_beta_lower - np.einsum("kij,k->ij", gamma_sym, beta_lower)

    dgamma = -2.0 * alpha * k + cov_beta + cov_beta.T

    neg_hess_alpha = -d2_alpha + np.einsum("kij,k->ij", gamma_sym, d_alpha)
    lie_k = (
        np.einsum("ijk,k->ij", d_k_arr, beta)
        + k @ d_beta
        + d_beta.T @ k
    )
    dk = (
        neg_hess_alpha
        + alpha * (ricci + k_trace * k - 2.0 * (k @ k_mixed))
        + lie_k
    )

    return AdmRhs(
        dgamma_dt=ExtrinsicCurvature(3, _symmetrize(dgamma)),
        dk_dt=ExtrinsicCurvature(3, _symmetrize(dk)),
    )


def hamiltonian_constraint(ricci_scalar_3d, k_trace, k_sq, rho) -> float:
    """Hamiltonian constraint H = R + K² − K_{ij}K^{ij} − 16πρ."""
    return (
        float(ricci_scalar_3d)
        + float(k_trace) * float(k_trace)
        - float(k_sq)
        - 16.0 * math.pi * float(rho)
    )


def k_squared(k: ExtrinsicCurvature, gamma_inv) -> float:
    """K_{ij} K^{ij} with both indices raised by γ^{ij} (once via K^j_i)."""
    k_up = k.raise_first(gamma_inv)
    return float(np.einsum("ij,ji->", k.components, k_up))


def momentum_constraint(
    k: ExtrinsicCurvature,
    gamma_inv,
    k_trace,
    christoffel,
    d_k_up,
    d_k_trace,
    j_vec,
) -> np.ndarray:
    """Momentum constraint M^i = ∇_j (K^{ij} − γ^{ij} K) − 8π J^i.

    ``d_k_up[i][j]`` = ∂_j K^{ij} and ``d_k_trace[j]`` = ∂_j K. ``k_trace``
    is accepted for symmetry with the Hamiltonian constraint but not used.
    Returns a length-3 array.
    """
    del k_trace
    if k.dim != 3:
        raise ValueError("Momentum constraint expects a 3-dimensional slice")
    gamma_inv = _square("gamma_inv", gamma_inv)
    gamma_sym = _connection(christoffel)
    d_k_up = _square("d_k_up", d_k_up)
    d_k_trace = _vector("d_k_trace", d_k_trace)
    j_vec = _vector("j_vec", j_vec)

    k_up = k.raise_first(gamma_inv)

    div_k_up = d_k_up.sum(axis=1)
    div_gamma_k = gamma_inv @ d_k_trace
    contracted = np.einsum("jjk->k", gamma_sym)
    gamma_corr = np.einsum("ijk,kj->i", gamma_sym, k_up) + k_up @ contracted

    return div_k_up - div_gamma_k + gamma_corr - 8.0 * math.pi * j_vec