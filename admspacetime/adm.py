"""ADM 3+1 state variables: spatial metric, extrinsic curvature and gauge."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

_SYMMETRY_TOL = 1e-12


class ExtrinsicCurvature:
    """Symmetric extrinsic curvature K_{ij} of a spatial hypersurface.

    Components are held as a ``(dim, dim)`` array indexed ``[i, j]``.
    """

    def __init__(self, dim: int, components: Iterable[float]) -> None:
        values = np.array(components, dtype=float).ravel()
        expected = dim * dim
        if values.size != expected:
            raise ValueError(
                f"Expected {expected} components for ExtrinsicCurvature in dim "
                f"{dim}, got {values.size}"
            )
        k = values.reshape((dim, dim))
        asym = np.abs(k - k.T)
        if asym.size and asym.max() >= _SYMMETRY_TOL:
            i, j = np.unravel_index(int(np.argmax(asym)), asym.shape)
            raise ValueError(
                f"ExtrinsicCurvature must be symmetric: K_{{{i}{j}}} = {k[i, j]} "
                f"but K_{{{j}{i}}} = {k[j, i]}"
            )
        self.dim = dim
        self.components = k

    @classmethod
    def from_flat(cls, dim: int, values: Iterable[float]) -> "ExtrinsicCurvature":
        """Build from a flat row-major sequence over ``[i, j]``."""
        return cls(dim, values)

    def component(self, i: int, j: int) -> float:
        """Return K_{ij}."""
        return float(self.components[i, j])

    def _check_inverse(self, gamma_inv) -> np.ndarray:
        gamma_inv = np.asarray(gamma_inv, dtype=float)
        if gamma_inv.shape != (self.dim, self.dim):
            raise ValueError(
                f"Dimension mismatch: K has dim {self.dim}, "
                f"inverse metric has shape {gamma_inv.shape}"
            )
        return gamma_inv

    def trace(self, gamma_inv) -> float:
        """Scalar trace K = γ^{ij} K_{ij}."""
        gamma_inv = self._check_inverse(gamma_inv)
        return float(np.einsum("ij,ij->", gamma_inv, self.components))

    def raise_first(self, gamma_inv) -> np.ndarray:
        """Mixed tensor K^i_j = γ^{ik} K_{kj}, indexed ``[i, j]``."""
        gamma_inv = self._check_inverse(gamma_inv)
        return gamma_inv @ self.components

    def __repr__(self) -> str:
        return (
            f"ExtrinsicCurvature(dim={self.dim}, "
            f"components={self.components.ravel().tolist()})"
        )


@dataclass
class AdmState:
    """ADM variables at one point: γ_{ij}, K_{ij}, lapse α and shift β^i."""

    gamma: np.ndarray
    k: ExtrinsicCurvature
    alpha: float = 1.0
    beta: tuple[float, float, float] = field(default=(0.0, 0.0, 0.0))

    def __post_init__(self) -> None:
        self.gamma = np.array(self.gamma, dtype=float)
        if self.gamma.ndim == 1:
            dim = int(round(np.sqrt(self.gamma.size)))
            self.gamma = self.gamma.reshape((dim, dim))
        self.beta = tuple(float(b) for b in self.beta)

    @classmethod
    def flat(cls) -> "AdmState":
        """Flat initial data: γ = δ, K = 0, α = 1, β = 0."""
        dim = 3
        return cls(
            gamma=np.eye(dim),
            k=ExtrinsicCurvature.from_flat(dim, [0.0] * (dim * dim)),
            alpha=1.0,
            beta=(0.0, 0.0, 0.0),
        )

    def gamma_inv(self) -> np.ndarray:
        """Inverse spatial metric γ^{ij}.

        Raises ValueError if γ is singular.
        """
        try:
            inv = np.linalg.inv(self.gamma)
        except np.linalg.LinAlgError as exc:
            raise ValueError("spatial metric is singular") from exc
        if not np.all(np.isfinite(inv)):
            raise ValueError("spatial metric is singular")
        return inv