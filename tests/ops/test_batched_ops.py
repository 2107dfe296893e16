"""Tests for batched linear algebra (batch on the last axis)."""
import pytest
import torch

from imudev.errors import ShapeMismatch
from imudev.ops import (
    batched_matvecmul,
    batched_rinv,
    batched_rinvsolve,
    batched_rinvsolve_,
)


@pytest.fixture
def spd_batch():
    """Batch of 5 well-conditioned 3x3 matrices, shape (3, 3, 5)."""
    torch.manual_seed(0)
    m = torch.randn(5, 3, 3, dtype=torch.float64)
    mats = m @ m.transpose(1, 2) + 3.0 * torch.eye(3, dtype=torch.float64)
    return mats.permute(1, 2, 0).contiguous()


class TestMatVecMul:
    def test_matches_per_slice(self):
        """Each column is A_i @ b_i."""
        torch.manual_seed(1)
        A = torch.randn(4, 3, 6, dtype=torch.float64)
        B = torch.randn(3, 6, dtype=torch.float64)
        out = batched_matvecmul(A, B)

        assert out.shape == (4, 6)
        for i in range(6):
            torch.testing.assert_close(out[:, i], A[:, :, i] @ B[:, i])

    def test_shape_mismatch(self):
        """Inner dimensions and batch sizes must agree."""
        with pytest.raises(ShapeMismatch):
            batched_matvecmul(torch.zeros(4, 3, 6), torch.zeros(2, 6))
        with pytest.raises(ShapeMismatch):
            batched_matvecmul(torch.zeros(4, 3, 6), torch.zeros(3, 5))
        with pytest.raises(ShapeMismatch):
            batched_matvecmul(torch.zeros(4, 3), torch.zeros(3, 5))


class TestInverse:
    def test_rinv(self, spd_batch):
        """Each slice times its inverse is the identity."""
        inv = batched_rinv(spd_batch)
        eye = torch.eye(3, dtype=torch.float64)
        for i in range(spd_batch.shape[2]):
            torch.testing.assert_close(spd_batch[:, :, i] @ inv[:, :, i], eye)


class TestRightDivision:
    def test_rinvsolve(self, spd_batch):
        """Result is A_i @ inv(B_i) for every slice."""
        torch.manual_seed(2)
        A = torch.randn(2, 3, 5, dtype=torch.float64)
        out = batched_rinvsolve(A, spd_batch)

        assert out.shape == (2, 3, 5)
        for i in range(5):
            expected = A[:, :, i] @ torch.linalg.inv(spd_batch[:, :, i])
            torch.testing.assert_close(out[:, :, i], expected)

    def test_in_place(self, spd_batch):
        """The in-place variant writes into and returns ``out``."""
        A = torch.ones(3, 3, 5, dtype=torch.float64)
        out = torch.empty_like(A)
        result = batched_rinvsolve_(out, A, spd_batch)

        assert result is out
        torch.testing.assert_close(out, batched_rinvsolve(A, spd_batch))

    def test_integer_inputs_promote_to_float(self):
        """Integer operands are solved in the default float type."""
        A = torch.tensor([[[2], [4]], [[6], [8]]])
        B = torch.tensor([[[2], [0]], [[0], [2]]])
        out = batched_rinvsolve(A, B)

        assert out.dtype == torch.get_default_dtype()
        torch.testing.assert_close(out[:, :, 0], torch.tensor([[1.0, 2.0], [3.0, 4.0]]))

    def test_batch_mismatch(self, spd_batch):
        """Batch sizes must agree."""
        with pytest.raises(ShapeMismatch):
            batched_rinvsolve(torch.zeros(3, 3, 4, dtype=torch.float64), spd_batch)
