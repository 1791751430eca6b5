"""Partial derivatives of Christoffel symbols."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

_SYMMETRY_TOL = 1e-12


class ChristoffelDerivative:
    """Partial derivatives ∂_ν Γ^ρ_{κμ}, symmetric in κ and μ.

    Components are held as an array of shape ``(dim,) * 4`` indexed
    ``[ρ, κ, μ, ν]``.
    """

    def __init__(self, dim: int, components: Iterable[float]) -> None:
        values = np.array(components, dtype=float).ravel()
        expected = dim**4
        if values.size != expected:
            raise ValueError(
                f"Expected {expected} components for ChristoffelDerivative "
                f"in dim {dim}, got {values.size}"
            )
        d_gamma = values.reshape((dim, dim, dim, dim))
        asym = np.abs(d_gamma - d_gamma.transpose(0, 2, 1, 3))
        if asym.size and asym.max() >= _SYMMETRY_TOL:
            rho, kappa, mu, nu = np.unravel_index(int(np.argmax(asym)), asym.shape)
            raise ValueError(
                f"ChristoffelDerivative must satisfy ∂_{nu}Γ^{rho}_{{{kappa},{mu}}} = "
                f"∂_{nu}Γ^{rho}_{{{mu},{kappa}}}: "
                f"{d_gamma[rho, kappa, mu, nu]} != {d_gamma[rho, mu, kappa, nu]}"
            )
        self.dim = dim
        self.components = d_gamma

    @classmethod
    def from_flat(cls, dim: int, values: Iterable[float]) -> "ChristoffelDerivative":
        """Build from a flat row-major sequence over ``[ρ, κ, μ, ν]``."""
        return cls(dim, values)

    def component(self, rho: int, kappa: int, mu: int, nu: int) -> float:
        """Return ∂_ν Γ^ρ_{κμ}."""
        return float(self.components[rho, kappa, mu, nu])

    def __repr__(self) -> str:
        return (
            f"ChristoffelDerivative(dim={self.dim}, "
            f"components={self.components.ravel().tolist()})"
        )