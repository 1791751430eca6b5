"""Grid-wide ADM right-hand sides, RK4 time stepping and constraint monitoring."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

import numpy as np

from admspacetime.adm import ExtrinsicCurvature
from admspacetime.adm_grid import GAMMA, K, AdmGrid
from admspacetime.adm_matter import AdmMatter, matter_dk_correction
from admspacetime.adm_rhs import adm_rhs_geodesic, hamiltonian_constraint, k_squared

_SYMMETRY_TOL = 1e-12


def _centered_diffs(a: np.ndarray, dx: float, dy: float, dz: float) -> np.ndarray:
    """Centered differences over the first three axes.

    The result covers the region one cell in from every face and carries the
    derivative direction as a new last axis.
    """
    ddx = (a[2:, 1:-1, 1:-1] - a[:-2, 1:-1, 1:-1]) * (0.5 / dx)
    ddy = (a[1:-1, 2:, 1:-1] - a[1:-1, :-2, 1:-1]) * (0.5 / dy)
    ddz = (a[1:-1, 1:-1, 2:] - a[1:-1, 1:-1, :-2]) * (0.5 / dz)
    return np.stack([ddx, ddy, ddz], axis=-1)


def _interior_geometry(grid: AdmGrid) -> tuple[np.ndarray, np.ndarray]:
    """Inverse metric and spatial Ricci tensor on the evolved interior.

    Both arrays have shape ``(nx-4, ny-4, nz-4, 3, 3)``.
    """
    gamma = grid.fields[..., GAMMA].reshape((grid.nx, grid.ny, grid.nz, 3, 3))
    try:
        gamma_inv = np.linalg.inv(gamma[1:-1, 1:-1, 1:-1])
    except np.linalg.LinAlgError as exc:
        raise ValueError("singular spatial metric at grid point") from exc
    if not np.all(np.isfinite(gamma_inv)):
        raise ValueError("singular spatial metric at grid point")

    # partial_g[..., i, j, k] = ∂_k γ_{ij}
    partial_g = _centered_diffs(gamma, grid.dx, grid.dy, grid.dz)
    bracket = (
        np.einsum("...jli->...ijl", partial_g)
        + np.einsum("...ilj->...ijl", partial_g)
        - partial_g
    )
    chris = 0.5 * np.einsum("...kl,...ijl->...kij", gamma_inv, bracket)
    if np.abs(chris - chris.swapaxes(-1, -2)).max() >= _SYMMETRY_TOL:
        raise ValueError("Christoffel symbols must be symmetric in lower indices")

    # d_chris[..., ρ, κ, μ, ν] = ∂_ν Γ^ρ_{κμ}
    d_chris = _centered_diffs(chris, grid.dx, grid.dy, grid.dz)
    c = chris[1:-1, 1:-1, 1:-1]

    # R_{σν} = ∂_ρ Γ^ρ_{νσ} − ∂_ν Γ^ρ_{ρσ} + Γ^ρ_{ρλ} Γ^λ_{νσ} − Γ^ρ_{νλ} Γ^λ_{ρσ}
    ricci = (
        np.einsum("...rnsr->...sn", d_chris)
        - np.einsum("...rrsn->...sn", d_chris)
        + np.einsum("...rrl,...lns->...sn", c, c)
        - np.einsum("...rnl,...lrs->...sn", c, c)
    )
    return gamma_inv[1:-1, 1:-1, 1:-1], ricci


def _interior_points(grid: AdmGrid):
    for ix in range(2, grid.nx - 2):
        for iy in range(2, grid.ny - 2):
            for iz in range(2, grid.nz - 2):
                yield ix, iy, iz


def _rhs(grid: AdmGrid, matters: Sequence[AdmMatter] | None) -> np.ndarray:
    rhs = np.zeros_like(grid.fields)
    gamma_inv, ricci = _interior_geometry(grid)
    for ix, iy, iz in _interior_points(grid):
        local = (ix - 2, iy - 2, iz - 2)
        state = grid.state_at(ix, iy, iz)
        out = adm_rhs_geodesic(state, gamma_inv[local], ricci[local])
        dk = out.dk_dt.components.copy()
        if matters is not None:
            dk += matter_dk_correction(matters[grid.flat_pt(ix, iy, iz)], state.gamma)
        rhs[ix, iy, iz, GAMMA] = out.dgamma_dt.components.ravel()
        rhs[ix, iy, iz, K] = dk.ravel()
    return rhs


def _check_matters(grid: AdmGrid, matters: Sequence[AdmMatter]) -> None:
    if len(matters) != grid.n_pts():
        raise ValueError(
            f"matters must have one entry per grid point: expected "
            f"{grid.n_pts()}, got {len(matters)}"
        )


def _rk4(
    grid: AdmGrid, dt: float, rhs_fn: Callable[[AdmGrid], np.ndarray]
) -> AdmGrid:
    k1 = rhs_fn(grid)
    k2 = rhs_fn(grid.with_rhs(k1, 0.5 * dt))
    k3 = rhs_fn(grid.with_rhs(k2, 0.5 * dt))
    k4 = rhs_fn(grid.with_rhs(k3, dt))
    combined = (k1 + 2.0 * k2 + 2.0 * k3 + k4) / 6.0
    return grid.with_rhs(combined, dt)


def geodesic_rhs(grid: AdmGrid) -> np.ndarray:
    """Vacuum geodesic-slicing RHS for the whole grid.

    The result has the layout of ``grid.fields``; boundary entries and the
    gauge fields are zero.
    """
    return _rhs(grid, None)


def adm_step_rk4(grid: AdmGrid, dt: float) -> AdmGrid:
    """Advance one RK4 step under geodesic slicing with frozen boundaries.

    A heuristic stability bound is dt ≤ 0.5 · min(dx, dy, dz).
    """
    return _rk4(grid, dt, geodesic_rhs)


def hamiltonian_l2(grid: AdmGrid) -> float:
    """RMS of the vacuum Hamiltonian constraint over the interior points."""
    gamma_inv, ricci = _interior_geometry(grid)
    total = 0.0
    count = 0
    for ix, iy, iz in _interior_points(grid):
        local = (ix - 2, iy - 2, iz - 2)
        g_inv = gamma_inv[local]
        r3 = float(np.einsum("ij,ij->", g_inv, ricci[local]))
        k = ExtrinsicCurvature(3, grid.k_flat(ix, iy, iz))
        h = hamiltonian_constraint(r3, k.trace(g_inv), k_squared(k, g_inv), 0.0)
        total += h * h
        count += 1
    return math.sqrt(total / count) if count else 0.0


def geodesic_rhs_with_matter(
    grid: AdmGrid, matters: Sequence[AdmMatter]
) -> np.ndarray:
    """Geodesic-slicing RHS with matter sources, one per grid point in flat order."""
    _check_matters(grid, matters)
    return _rhs(grid, matters)


def adm_step_rk4_with_source(
    grid: AdmGrid, dt: float, matters: Sequence[AdmMatter]
) -> AdmGrid:
    """RK4 step with matter sources held fixed across all four stages."""
    _check_matters(grid, matters)
    return _rk4(grid, dt, lambda g: _rhs(g, matters))