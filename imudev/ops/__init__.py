"""imudev.ops: Batched linear algebra (batch on the last axis)."""
from imudev.ops.batched import (
    batched_matvecmul,
    batched_rinv,
    batched_rinvsolve,
    batched_rinvsolve_,
)

__all__ = [
    "batched_matvecmul",
    "batched_rinv",
    "batched_rinvsolve",
    "batched_rinvsolve_",
]
