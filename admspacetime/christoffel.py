"""Christoffel symbols of the second kind for a torsion-free connection."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

_SYMMETRY_TOL = 1e-12


class Christoffel:
    """Christoffel symbols Γ^i_{jk}, symmetric in the two lower indices.

    Components are held as an array of shape ``(dim, dim, dim)`` indexed
    ``[i, j, k]`` for Γ^i_{jk``. They are not the components of a tensor:
    they pick up an inhomogeneous term under a change of coordinates.
    """

    def __init__(self, dim: int, components: Iterable[float]) -> None:
        values = np.array(components, dtype=float).ravel()
        expected = dim**3
        if values.size != expected:
            raise ValueError(
                f"Expected {expected} components for Christoffel in dim {dim}, "
                f"got {values.size}"
            )
        gamma = values.reshape((dim, dim, dim))
        asym = np.abs(gamma - gamma.transpose(0, 2, 1))
        if asym.size and asym.max() >= _SYMMETRY_TOL:
            i, j, k = np.unravel_index(int(np.argmax(asym)), asym.shape)
            raise ValueError(
                "Christoffel symbols must be symmetric in lower indices: "
                f"Γ^{i}_{{{j},{k}}} = {gamma[i, j, k]} but "
                f"Γ^{i}_{{{k},{j}}} = {gamma[i, k, j]}"
            )
        self.dim = dim
        self.components = gamma

    @classmethod
    def from_flat(cls, dim: int, values: Iterable[float]) -> "Christoffel":
        """Build from a flat row-major sequence over ``[i, j, k]``."""
        return cls(dim, values)

    @classmethod
    def from_metric(cls, g, g_inv, partial_g) -> "Christoffel":
        """Levi-Civita symbols from a metric, its inverse and its derivatives.

        ``partial_g[i, j, k]`` holds ∂_k g_{ij}. Uses
        Γ^k_{ij} = ½ g^{kl} (∂_i g_{jl} + ∂_j g_{il} − ∂_l g_{ij}).
        """
        g = np.asarray(g, dtype=float)
        g_inv = np.asarray(g_inv, dtype=float)
        partial_g = np.asarray(partial_g, dtype=float)

        if g.ndim != 2 or g.shape[0] != g.shape[1]:
            raise ValueError(f"Metric must be a square matrix, got shape {g.shape}")
        dim = g.shape[0]
        if dim < 1:
            raise ValueError("Dimension must be at least 1")
        if g_inv.shape != (dim, dim):
            raise ValueError(
                f"Dimension mismatch: g ({dim}) vs g_inv {g_inv.shape}"
            )
        if partial_g.shape != (dim, dim, dim):
            raise ValueError(
                f"Dimension mismatch: g ({dim}) vs partial_g {partial_g.shape}"
            )

        # bracket[i, j, l] = ∂_i g_{jl} + ∂_j g_{il} − ∂_l g_{ij}
        bracket = (
            np.einsum("jli->ijl", partial_g)
            + np.einsum("ilj->ijl", partial_g)
            - partial_g
        )
        gamma = 0.5 * np.einsum("kl,ijl->kij", g_inv, bracket)
        return cls(dim, gamma)

    def component(self, i: int, j: int, k: int) -> float:
        """Return Γ^i_{jk}."""
        return float(self.components[i, j, k])

    def __repr__(self) -> str:
        return f"Christoffel(dim={self.dim}, components={self.components.ravel().tolist()})"