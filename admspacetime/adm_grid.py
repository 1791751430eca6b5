"""Uniform 3D Cartesian grid of ADM state variables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from itertools import product

import numpy as np

from admspacetime.adm import AdmState, ExtrinsicCurvature

# Per-point field layout along the last axis of ``AdmGrid.fields``.
GAMMA = slice(0, 9)
K = slice(9, 18)
ALPHA_OFF = 18
BETA = slice(19, 22)
EVOLVED = slice(0, 18)
FIELDS_PER_PT = 22

_MIN_SIZE = 5


@dataclass(eq=False)
class AdmGrid:
    """ADM variables on a uniform 3D grid.

    ``fields`` has shape ``(nx, ny, nz, 22)``: γ_{ij} row-major in 0..9,
    K_{ij} row-major in 9..18, α at 18 and β^i in 19..22. Point ``(ix, iy, iz)``
    sits at ``(x0 + ix*dx, y0 + iy*dy, z0 + iz*dz)``. Only the interior, at
    least two cells from every face, is evolved; the outer band keeps its
    initial data.
    """

    nx: int
    ny: int
    nz: int
    dx: float
    dy: float
    dz: float
    x0: float
    y0: float
    z0: float
    fields: np.ndarray

    def __post_init__(self) -> None:
        if self.nx < _MIN_SIZE or self.ny < _MIN_SIZE or self.nz < _MIN_SIZE:
            raise ValueError("Grid must be at least 5×5×5")
        shape = (self.nx, self.ny, self.nz, FIELDS_PER_PT)
        fields = np.array(self.fields, dtype=float)
        if fields.size != int(np.prod(shape)):
            raise ValueError(
                f"fields must hold {int(np.prod(shape))} values, got {fields.size}"
            )
        self.fields = fields.reshape(shape)

    @classmethod
    def build(
        cls,
        nx: int,
        ny: int,
        nz: int,
        dx: float,
        dy: float,
        dz: float,
        x0: float,
        y0: float,
        z0: float,
        state_fn: Callable[[float, float, float], AdmState],
    ) -> "AdmGrid":
        """Fill a grid by evaluating ``state_fn(x, y, z)`` at every point."""
        if nx < _MIN_SIZE or ny < _MIN_SIZE or nz < _MIN_SIZE:
            raise ValueError("Grid must be at least 5×5×5")
        fields = np.zeros((nx, ny, nz, FIELDS_PER_PT))
        for ix, iy, iz in product(range(nx), range(ny), range(nz)):
            state = state_fn(x0 + ix * dx, y0 + iy * dy, z0 + iz * dz)
            point = fields[ix, iy, iz]
            point[GAMMA] = np.asarray(state.gamma, dtype=float).ravel()
            point[K] = state.k.components.ravel()
            point[ALPHA_OFF] = state.alpha
            point[BETA] = state.beta
        return cls(nx, ny, nz, dx, dy, dz, x0, y0, z0, fields)

    @classmethod
    def flat(
        cls, nx: int, ny: int, nz: int, dx: float, dy: float, dz: float
    ) -> "AdmGrid":
        """Flat data everywhere: γ = δ, K = 0, α = 1, β = 0, origin at 0."""
        return cls.build(
            nx, ny, nz, dx, dy, dz, 0.0, 0.0, 0.0, lambda _x, _y, _z: AdmState.flat()
        )

    def flat_pt(self, ix: int, iy: int, iz: int) -> int:
        """Flat point index, z innermost."""
        return ix * self.ny * self.nz + iy * self.nz + iz

    def n_pts(self) -> int:
        """Total number of grid points."""
        return self.nx * self.ny * self.nz

    def gamma_flat(self, ix: int, iy: int, iz: int) -> np.ndarray:
        """γ_{ij} at a point as 9 row-major values."""
        return self.fields[ix, iy, iz, GAMMA].copy()

    def k_flat(self, ix: int, iy: int, iz: int) -> np.ndarray:
        """K_{ij} at a point as 9 row-major values."""
        return self.fields[ix, iy, iz, K].copy()

    def alpha_at(self, ix: int, iy: int, iz: int) -> float:
        """Lapse α at a point."""
        return float(self.fields[ix, iy, iz, ALPHA_OFF])

    def beta_at(self, ix: int, iy: int, iz: int) -> tuple[float, float, float]:
        """Shift β^i at a point."""
        bx, by, bz = self.fields[ix, iy, iz, BETA]
        return (float(bx), float(by), float(bz))

    def state_at(self, ix: int, iy: int, iz: int) -> AdmState:
        """Reconstruct the ADM state stored at a point."""
        return AdmState(
            gamma=self.gamma_flat(ix, iy, iz).reshape((3, 3)),
            k=ExtrinsicCurvature(3, self.k_flat(ix, iy, iz)),
            alpha=self.alpha_at(ix, iy, iz),
            beta=self.beta_at(ix, iy, iz),
        )

    def is_interior(self, ix: int, iy: int, iz: int) -> bool:
        """True if the point lies at least two cells from every face."""
        return (
            2 <= ix < self.nx - 2
            and 2 <= iy < self.ny - 2
            and 2 <= iz < self.nz - 2
        )

    def with_rhs(self, rhs, scale: float) -> "AdmGrid":
        """New grid with interior γ and K advanced by ``scale * rhs``.

        ``rhs`` has the layout of ``fields``; boundary entries and the gauge
        fields are ignored.
        """
        rhs = np.asarray(rhs, dtype=float)
        if rhs.size != self.fields.size:
            raise ValueError(
                f"rhs must hold {self.fields.size} values, got {rhs.size}"
            )
        rhs = rhs.reshape(self.fields.shape)
        fields = self.fields.copy()
        interior = (slice(2, -2), slice(2, -2), slice(2, -2), EVOLVED)
        fields[interior] += scale * rhs[interior]
        return AdmGrid(
            self.nx, self.ny, self.nz,
            self.dx, self.dy, self.dz,
            self.x0, self.y0, self.z0,
            fields,
        )