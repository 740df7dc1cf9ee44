"""High-level operations for iconsync."""

from iconsync.operations.build import compute_build_plan
from iconsync.operations.build import execute_build_plan

__all__ = [
    "compute_build_plan",
    "execute_build_plan",
]
