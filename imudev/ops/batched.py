"""Batched linear algebra with the batch on the LAST axis.

torch's batched routines expect the batch first; these helpers follow the
layout convention of this package instead (samples on the trailing axis).
Inverse and solve are plain per-slice loops.
"""
import torch

from imudev.errors import ShapeMismatch


def _check_3d(name: str, t: torch.Tensor) -> None:
    if t.ndim != 3:
        raise ShapeMismatch(f"{name} must be a 3-tensor (n, m, batch), got shape {tuple(t.shape)}")


def batched_matvecmul(A: torch.Tensor, B: torch.Tensor) -> torch.Tensor:
    """Multiply each matrix ``A[:, :, i]`` with the vector ``B[:, i]``.

    Args:
        A: Batch of matrices (n, m, batch)
        B: Batch of vectors (m, batch)

    Returns:
        Batch of vectors (n, batch)
    """
    A = torch.as_tensor(A)
    B = torch.as_tensor(B)
    _check_3d("A", A)
    if B.ndim != 2 or B.shape[0] != A.shape[1] or B.shape[1] != A.shape[2]:
        raise ShapeMismatch(
            f"B must have shape ({A.shape[1]}, {A.shape[2]}), got {tuple(B.shape)}"
        )
    # (batch, n, m) @ (batch, m, 1) -> (batch, n, 1)
    out = torch.bmm(A.permute(2, 0, 1), B.T.unsqueeze(-1))
    return out.squeeze(-1).T


def batched_rinv(A: torch.Tensor) -> torch.Tensor:
    """Invert every square matrix ``A[:, :, i]``."""
    A = torch.as_tensor(A)
    _check_3d("A", A)
    out = torch.empty_like(A)
    for i in range(A.shape[2]):
        out[:, :, i] = torch.linalg.inv(A[:, :, i])
    return out


def batched_rinvsolve_(out: torch.Tensor, A: torch.Tensor, B: torch.Tensor) -> torch.Tensor:
    """Right division ``out[:, :, i] = A[:, :, i] @ inv(B[:, :, i])``, in place.

    Solves ``X B_i = A_i`` for every slice without forming the inverse.
    """
    _check_3d("A", A)
    _check_3d("B", B)
    if A.shape[2] != B.shape[2]:
        raise ShapeMismatch(
            f"Batch sizes must match, got {A.shape[2]} and {B.shape[2]}"
        )
    for i in range(out.shape[2]):
        # X B = A  <=>  B^T X^T = A^T
        out[:, :, i] = torch.linalg.solve(B[:, :, i].T, A[:, :, i].T).T
    return out


def batched_rinvsolve(A: torch.Tensor, B: torch.Tensor) -> torch.Tensor:
    """Right division ``A[:, :, i] @ inv(B[:, :, i])`` for every slice."""
    A = torch.as_tensor(A)
    B = torch.as_tensor(B)
    _check_3d("A", A)
    _check_3d("B", B)
    dtype = torch.promote_types(A.dtype, B.dtype)
    if not dtype.is_floating_point and not dtype.is_complex:
        dtype = torch.get_default_dtype()
    out = torch.empty(A.shape, dtype=dtype, device=A.device)
    return batched_rinvsolve_(out, A.to(dtype), B.to(dtype))
