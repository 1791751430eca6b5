"""ADM 3+1 decomposition, constraints and RK4 evolution on Cartesian grids."""

__version__ = "0.1.0"
__all__ = [
    "christoffel",
    "christoffel_derivative",
    "adm",
    "adm_rhs",
    "adm_matter",
    "adm_grid",
    "adm_step",
]