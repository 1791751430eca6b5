# admspacetime

Tools for the 3+1 (ADM) decomposition of spacetime. The package covers:

* Christoffel symbols computed from a metric.
* Extrinsic curvature.
* The ADM evolution equations.
* The Hamiltonian and momentum constraints.
* A fourth-order Runge-Kutta time stepper on a uniform 3D Cartesian grid.

All arrays are NumPy arrays.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Overview

| Module | Contents |
| --- | --- |
| `admspacetime.christoffel` | `Christoffel` holds Γ^i_{jk} and checks that it is symmetric in the lower indices. `Christoffel.from_metric` builds it from a metric. |
| `admspacetime.christoffel_derivative` | `ChristoffelDerivative` holds ∂_ν Γ^ρ_{κμ}. |
| `admspacetime.adm` | `ExtrinsicCurvature` holds K_{ij}, with `trace` and `raise_first`. `AdmState` holds γ, K, α and β, with `flat` and `gamma_inv`. |
| `admspacetime.adm_rhs` | `AdmRhs`, `adm_rhs_geodesic`, `adm_rhs_vacuum`, `hamiltonian_constraint`, `k_squared`, `momentum_constraint` |
| `admspacetime.adm_matter` | `AdmMatter` holds ρ, J^i, S_{ij} and S, with `vacuum` and `from_t4d`. Also `matter_dk_correction`. |
| `admspacetime.adm_grid` | `AdmGrid` holds the ADM fields on an `nx × ny × nz` grid. |
| `admspacetime.adm_step` | `geodesic_rhs`, `adm_step_rk4`, `hamiltonian_l2`, `geodesic_rhs_with_matter`, `adm_step_rk4_with_source` |

## Conventions

* Units are geometric, with G = c = 1.
* Components are stored in NumPy arrays with one axis per index:
  * `Christoffel.components[i, j, k]` is Γ^i_{jk}.
  * `ChristoffelDerivative.components[ρ, κ, μ, ν]` is ∂_ν Γ^ρ_{κμ}.
  * In `partial_g`, the entry at `[i, j, k]` is ∂_k g_{ij}.

  The `from_flat` constructors take the same values as one flat, row-major sequence.
* `AdmGrid.fields` has shape `(nx, ny, nz, 22)`. The 22 values at each point are, in order:
  * γ_{ij}, row-major (9 values)
  * K_{ij}, row-major (9 values)
  * α (1 value)
  * β^i (3 values)

  `gamma_flat` and `k_flat` return 9 row-major values for a point.
* The outer band of the grid is two cells wide and is never evolved. A grid must have at least 5 points in every direction.
* Invalid input raises `ValueError`. This covers:
  * a K_{ij} that is not symmetric
  * a connection that is not symmetric in its lower indices
  * a component count that does not fit the dimension
  * a singular metric
  * a matter list whose length differs from the number of grid points

## Example

Put isotropic extrinsic curvature on a flat slice and advance it one step under geodesic slicing (α = 1, β = 0):

```python
from admspacetime.adm import AdmState, ExtrinsicCurvature
from admspacetime.adm_grid import AdmGrid
from admspacetime.adm_step import adm_step_rk4, hamiltonian_l2

eps = 0.01

def initial(x, y, z):
    state = AdmState.flat()
    state.k = ExtrinsicCurvature.from_flat(3, [eps, 0, 0, 0, eps, 0, 0, 0, eps])
    return state

grid = AdmGrid.build(5, 5, 5, 0.1, 0.1, 0.1, 0.0, 0.0, 0.0, initial)
stepped = adm_step_rk4(grid, 0.001)

print(stepped.gamma_flat(2, 2, 2))   # diagonal ≈ 1 - 2·eps·dt
print(hamiltonian_l2(grid))          # 6·eps² for this data
```

Flat data is an exact solution, so its right-hand side is zero. As a result, `adm_step_rk4(AdmGrid.flat(5, 5, 5, 0.1, 0.1, 0.1), dt)` returns the same fields.

To add matter sources:

1. Make one `AdmMatter` for every grid point, in the grid's flat point order (`AdmGrid.flat_pt`). Use either `AdmMatter.vacuum()` or `AdmMatter.from_t4d`, which decomposes a 4×4 stress-energy tensor.
2. Pass the list to `adm_step_rk4_with_source`.

The sources are held fixed across the four Runge-Kutta stages.

## What the package does not do

* The grid stepper uses geodesic slicing only. `adm_rhs_vacuum` handles general lapse and shift at a single point, but no grid-wide stepper uses it.
* Lapse and shift on the grid are never evolved.
* There is no general tensor type. There are no public routines for the Riemann tensor, the Ricci tensor or the Einstein tensor. The grid code computes the spatial Ricci tensor internally.
* There is no command-line program.
* There is no file output. Diagnostics are returned as values.