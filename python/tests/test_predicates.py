import numpy as np
import pytest

from tabula import (
    Dense,
    Hash,
    is_diagonal,
    is_identity,
    is_scalar,
    is_special_diagonal,
    is_square,
    is_zeros,
)


BACKENDS = [Dense, Hash]


@pytest.mark.parametrize("cls", BACKENDS)
def test_is_zeros(cls):
    m = cls.zeros(3, 2)
    assert is_zeros(m)
    m.update(2, 1, 1.0)
    assert not is_zeros(m)
    assert is_zeros(m.view(0, 0, 2, 2))


@pytest.mark.parametrize("cls", BACKENDS)
def test_is_square(cls):
    assert is_square(cls.zeros(3, 3))
    assert not is_square(cls.zeros(3, 2))
    assert is_square(cls.zeros(4, 2).view(0, 0, 2, 2))


@pytest.mark.parametrize("cls", BACKENDS)
def test_is_diagonal(cls):
    assert is_diagonal(cls.from_array(np.diag([1.0, 2.0, 3.0])))
    assert is_diagonal(cls.zeros(2, 2))
    assert not is_diagonal(cls.from_array([[1.0, 1.0], [0.0, 1.0]]))
    assert not is_diagonal(cls.zeros(2, 3))


@pytest.mark.parametrize("cls", BACKENDS)
def test_is_identity(cls):
    assert is_identity(cls.from_array(np.eye(3)))
    assert not is_identity(cls.from_array(np.diag([1.0, 2.0])))
    assert not is_identity(cls.zeros(2, 2))
    assert not is_identity(cls.from_array(np.eye(3)[:, :2]))


@pytest.mark.parametrize("cls", BACKENDS)
def test_is_scalar(cls):
    assert is_scalar(cls.from_array(4.0 * np.eye(3)))
    assert is_scalar(cls.zeros(2, 2))
    assert not is_scalar(cls.from_array(np.diag([1.0, 2.0])))
    assert not is_scalar(cls.from_array([[2.0, 1.0], [0.0, 2.0]]))


def test_is_special_diagonal_with_custom_match():
    m = Dense.from_array([[1.0, 5.0], [5.0, 1.0]])
    assert is_special_diagonal(m, lambda value, row, column: value > 0)
    assert not is_special_diagonal(m, lambda value, row, column: row == column)
