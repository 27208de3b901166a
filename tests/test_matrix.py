"""Unit tests for the Matrix type.

Tests cover:
- Construction, indexing and immutability
- Approximate equality
- Multiplication by matrices and tuples
- Transpose, determinant, submatrix, minor and cofactor
- Inversion and the non-invertible error path
"""

import numpy as np
import pytest

from phongtracer.core.matrix import IDENTITY, Matrix, MatrixNotInvertibleError
from phongtracer.core.tuples import Point, Tuple, Vector

A_4X4 = Matrix(
    [
        [-5, 2, 6, -8],
        [1, -5, 1, 8],
        [7, 7, -6, -7],
        [1, -3, 7, 4],
    ]
)


class TestConstruction:
    """Tests for building and reading matrices."""

    def test_construct_4x4(self):
        m = Matrix(
            [
                [1, 2, 3, 4],
                [5.5, 6.5, 7.5, 8.5],
                [9, 10, 11, 12],
                [13.5, 14.5, 15.5, 16.5],
            ]
        )
        assert m.shape == (4, 4)
        assert m[0, 0] == 1
        assert m[0, 3] == 4
        assert m[1, 0] == 5.5
        assert m[1, 2] == 7.5
        assert m[2, 2] == 11
        assert m[3, 0] == 13.5
        assert m[3, 2] == 15.5

    def test_construct_2x2(self):
        m = Matrix([[-3, 5], [1, -2]])
        assert m.rows == 2
        assert m.cols == 2
        assert m[0, 1] == 5
        assert m[1, 1] == -2

    def test_construct_3x3(self):
        m = Matrix([[-3, 5, 0], [1, -2, -7], [0, 1, 1]])
        assert m[0, 0] == -3
        assert m[1, 1] == -2
        assert m[2, 2] == 1

    def test_rejects_ragged_rows(self):
        with pytest.raises(ValueError):
            Matrix([[1, 2], [3]])

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            Matrix([])

    def test_to_numpy_returns_copy(self):
        m = Matrix.identity(4)
        data = m.to_numpy()
        data[0, 0] = 42.0
        assert m[0, 0] == 1.0

    def test_storage_is_read_only(self):
        source = np.identity(3)
        m = Matrix(source)
        source[0, 0] = 9.0
        assert m[0, 0] == 1.0


class TestEquality:
    """Tests for epsilon-based matrix comparison."""

    def test_identical_matrices(self):
        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        assert a == b

    def test_different_matrices(self):
        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[2, 3, 4, 5], [6, 7, 8, 9], [8, 7, 6, 5], [4, 3, 2, 1]])
        assert a != b

    def test_within_epsilon(self):
        a = Matrix([[1.0, 2.0], [3.0, 4.0]])
        b = Matrix([[1.000001, 2.0], [3.0, 3.999999]])
        assert a == b

    def test_different_shapes_are_unequal(self):
        assert Matrix.identity(3) != Matrix.identity(4)


class TestMultiplication:
    """Tests for matrix products."""

    def test_multiply_two_matrices(self):
        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[-2, 1, 2, 3], [3, 2, 1, -1], [4, 3, 6, 5], [1, 2, 7, 8]])
        expected = Matrix(
            [
                [20, 22, 50, 48],
                [44, 54, 114, 108],
                [40, 58, 110, 102],
                [16, 26, 46, 42],
            ]
        )
        assert a @ b == expected

    def test_multiply_by_tuple(self):
        a = Matrix([[1, 2, 3, 4], [2, 4, 4, 2], [8, 6, 4, 1], [0, 0, 0, 1]])
        assert a @ Tuple(1, 2, 3, 1) == Tuple(18, 24, 33, 1)

    def test_affine_matrix_keeps_point_type(self):
        a = Matrix([[1, 2, 3, 4], [2, 4, 4, 2], [8, 6, 4, 1], [0, 0, 0, 1]])
        result = a @ Point(1, 2, 3)
        assert isinstance(result, Point)
        assert result == Point(18, 24, 33)

    def test_affine_matrix_keeps_vector_type(self):
        a = Matrix([[1, 2, 3, 4], [2, 4, 4, 2], [8, 6, 4, 1], [0, 0, 0, 1]])
        result = a @ Vector(1, 2, 3)
        assert isinstance(result, Vector)
        assert result == Vector(14, 22, 32)

    def test_identity_is_neutral(self):
        a = Matrix([[0, 1, 2, 4], [1, 2, 4, 8], [2, 4, 8, 16], [4, 8, 16, 32]])
        assert a @ IDENTITY == a
        assert IDENTITY @ Tuple(1, 2, 3, 4) == Tuple(1, 2, 3, 4)

    def test_mismatched_shapes_raise(self):
        with pytest.raises(ValueError):
            Matrix.identity(3) @ Matrix.identity(4)

    def test_non_4x4_cannot_apply_to_tuple(self):
        with pytest.raises(ValueError):
            Matrix.identity(3) @ Point(1, 2, 3)


class TestTranspose:
    """Tests for transposition."""

    def test_transpose(self):
        a = Matrix([[0, 9, 3, 0], [9, 8, 0, 8], [1, 8, 5, 3], [0, 0, 5, 8]])
        expected = Matrix([[0, 9, 1, 0], [9, 8, 8, 0], [3, 0, 5, 5], [0, 8, 3, 8]])
        assert a.transpose() == expected

    def test_transpose_identity(self):
        assert IDENTITY.transpose() == IDENTITY


class TestDeterminant:
    """Tests for determinants, submatrices, minors and cofactors."""

    def test_determinant_2x2(self):
        assert Matrix([[1, 5], [-3, 2]]).determinant() == 17

    def test_submatrix_of_3x3(self):
        a = Matrix([[1, 5, 0], [-3, 2, 7], [0, 6, -3]])
        assert a.submatrix(0, 2) == Matrix([[-3, 2], [0, 6]])

    def test_submatrix_of_4x4(self):
        a = Matrix([[-6, 1, 1, 6], [-8, 5, 8, 6], [-1, 0, 8, 2], [-7, 1, -1, 1]])
        assert a.submatrix(2, 1) == Matrix([[-6, 1, 6], [-8, 8, 6], [-7, -1, 1]])

    def test_minor(self):
        a = Matrix([[3, 5, 0], [2, -1, -7], [6, -1, 5]])
        assert a.submatrix(1, 0).determinant() == 25
        assert a.minor(1, 0) == 25

    def test_cofactor(self):
        a = Matrix([[3, 5, 0], [2, -1, -7], [6, -1, 5]])
        assert a.minor(0, 0) == -12
        assert a.cofactor(0, 0) == -12
        assert a.minor(1, 0) == 25
        assert a.cofactor(1, 0) == -25

    def test_determinant_3x3(self):
        a = Matrix([[1, 2, 6], [-5, 8, -4], [2, 6, 4]])
        assert a.cofactor(0, 0) == 56
        assert a.cofactor(0, 1) == 12
        assert a.cofactor(0, 2) == -46
        assert a.determinant() == -196

    def test_determinant_4x4(self):
        a = Matrix([[-2, -8, 3, 5], [-3, 1, 7, 3], [1, 2, -9, 6], [-6, 7, 7, -9]])
        assert a.cofactor(0, 0) == 690
        assert a.cofactor(0, 1) == 447
        assert a.cofactor(0, 2) == 210
        assert a.cofactor(0, 3) == 51
        assert a.determinant() == -4071

    def test_determinant_requires_square(self):
        with pytest.raises(ValueError):
            Matrix([[1, 2, 3], [4, 5, 6]]).determinant()


class TestInverse:
    """Tests for inversion."""

    def test_invertible(self):
        a = Matrix([[6, 4, 4, 4], [5, 5, 7, 6], [4, -9, 3, -7], [9, 1, 7, -6]])
        assert a.determinant() == -2120
        assert a.invertible()

    def test_not_invertible(self):
        a = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        assert a.determinant() == 0
        assert not a.invertible()

    def test_inverse_of_singular_matrix_raises(self):
        a = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        with pytest.raises(MatrixNotInvertibleError, match="not invertible"):
            a.inverse()

    def test_not_invertible_error_is_value_error(self):
        with pytest.raises(ValueError):
            Matrix([[1, 2], [2, 4]]).inverse()

    def test_inverse_values(self):
        b = A_4X4.inverse()
        assert A_4X4.determinant() == 532
        assert A_4X4.cofactor(2, 3) == -160
        assert b[3, 2] == pytest.approx(-160 / 532)
        assert A_4X4.cofactor(3, 2) == 105
        assert b[2, 3] == pytest.approx(105 / 532)
        expected = Matrix(
            [
                [0.21805, 0.45113, 0.24060, -0.04511],
                [-0.80827, -1.45677, -0.44361, 0.52068],
                [-0.07895, -0.22368, -0.05263, 0.19737],
                [-0.52256, -0.81391, -0.30075, 0.30639],
            ]
        )
        assert b == expected

    def test_inverse_of_second_matrix(self):
        a = Matrix([[8, -5, 9, 2], [7, 5, 6, 1], [-6, 0, 9, 6], [-3, 0, -9, -4]])
        expected = Matrix(
            [
                [-0.15385, -0.15385, -0.28205, -0.53846],
                [-0.07692, 0.12308, 0.02564, 0.03077],
                [0.35897, 0.35897, 0.43590, 0.92308],
                [-0.69231, -0.69231, -0.76923, -1.92308],
            ]
        )
        assert a.inverse() == expected

    def test_inverse_of_third_matrix(self):
        a = Matrix([[9, 3, 0, 9], [-5, -2, -6, -3], [-4, 9, 6, 4], [-7, 6, 6, 2]])
        expected = Matrix(
            [
                [-0.04074, -0.07778, 0.14444, -0.22222],
                [-0.07778, 0.03333, 0.36667, -0.33333],
                [-0.02901, -0.14630, -0.10926, 0.12963],
                [0.17778, 0.06667, -0.26667, 0.33333],
            ]
        )
        assert a.inverse() == expected

    def test_product_times_inverse_recovers_matrix(self):
        a = Matrix([[3, -9, 7, 3], [3, -8, 2, -9], [-4, 4, 4, 1], [-6, 5, -1, 1]])
        b = Matrix([[8, 2, 2, 2], [3, -1, 7, 0], [7, 0, 5, 4], [6, -2, 0, 5]])
        c = a @ b
        assert c @ b.inverse() == a

    @pytest.mark.parametrize(
        "matrix",
        [
            A_4X4,
            Matrix([[2, 0], [0, 4]]),
            Matrix([[1, 2, 6], [-5, 8, -4], [2, 6, 4]]),
        ],
    )
    def test_inverse_properties(self, matrix):
        n = matrix.rows
        assert matrix @ matrix.inverse() == Matrix.identity(n)
        assert matrix.inverse().inverse() == matrix

    def test_inverse_of_identity(self):
        assert IDENTITY.inverse() == IDENTITY

    def test_inverse_of_transpose_is_transpose_of_inverse(self):
        assert A_4X4.transpose().inverse() == A_4X4.inverse().transpose()
