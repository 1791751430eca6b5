"""3+1 projection of a stress-energy tensor into ADM matter sources."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


def _zeros3() -> np.ndarray:
    return np.zeros(3)


def _zeros33() -> np.ndarray:
    return np.zeros((3, 3))


@dataclass(eq=False)
class AdmMatter:
    """Matter sources at one point under geodesic slicing.

    ``rho`` is the energy density, ``j`` the momentum density J^i,
    ``s_ij`` the spatial stress S_{ij} and ``s_trace`` its trace γ^{ij}S_{ij}.
    """

    rho: float = 0.0
    j: np.ndarray = field(default_factory=_zeros3)
    s_ij: np.ndarray = field(default_factory=_zeros33)
    s_trace: float = 0.0

    def __post_init__(self) -> None:
        self.rho = float(self.rho)
        self.j = np.asarray(self.j, dtype=float).reshape(3)
        self.s_ij = np.asarray(self.s_ij, dtype=float).reshape((3, 3))
        self.s_trace = float(self.s_trace)

    @classmethod
    def vacuum(cls) -> "AdmMatter":
        """No matter: ρ = 0, J = 0, S = 0."""
        return cls()

    @classmethod
    def from_t4d(cls, t4, gamma_inv) -> "AdmMatter":
        """Decompose a 4D T_{μν} (index 0 is time) under geodesic slicing.

        ρ = T_{00}, S_{ij} = T_{ij}, S = γ^{ij} S_{ij}, J^i = −γ^{ij} T_{0j}.
        """
        t4 = np.asarray(t4, dtype=float)
        if t4.ndim == 1 and t4.size == 16:
            t4 = t4.reshape((4, 4))
        if t4.shape != (4, 4):
            raise ValueError(
                f"T_{{μν}} must be 4D for ADM decomposition, got shape {t4.shape}"
            )
        gamma_inv = np.asarray(gamma_inv, dtype=float)
        if gamma_inv.ndim == 1 and gamma_inv.size == 9:
            gamma_inv = gamma_inv.reshape((3, 3))
        if gamma_inv.shape != (3, 3):
            raise ValueError(
                f"inverse spatial metric must be 3x3, got shape {gamma_inv.shape}"
            )

        rho = t4[0, 0]
        s_ij = t4[1:, 1:].copy()
        s_trace = float(np.einsum("ij,ij->", gamma_inv, s_ij))
        j = -(gamma_inv @ t4[0, 1:])
        return cls(rho=rho, j=j, s_ij=s_ij, s_trace=s_trace)


def matter_dk_correction(matter: AdmMatter, gamma) -> np.ndarray:
    """Matter contribution to ∂_t K_{ij}: −8π S_{ij} + 4π γ_{ij}(S − ρ).

    Geometric units G = c = 1. Returns a 3x3 array to add to the vacuum RHS.
    """
    gamma = np.asarray(gamma, dtype=float)
    if gamma.ndim == 1 and gamma.size == 9:
        gamma = gamma.reshape((3, 3))
    if gamma.shape != (3, 3):
        raise ValueError(f"spatial metric must be 3x3, got shape {gamma.shape}")
    s_minus_rho = matter.s_trace - matter.rho
    return -8.0 * math.pi * matter.s_ij + 4.0 * math.pi * gamma * s_minus_rho