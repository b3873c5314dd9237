import numpy as np
import pytest

from tabula import Dense, Hash, rewriters
from tabula.errors import NonPositiveSizeError, OutOfRangeError, ViewOutOfBaseError


BACKENDS = [Dense, Hash]


def make(cls, rows=4, columns=4):
    # cell (r, c) holds r * columns + c + 1, so every cell is distinct and non-zero
    return cls.from_array(np.arange(1.0, rows * columns + 1.0).reshape(rows, columns))


@pytest.mark.parametrize("cls", BACKENDS)
def test_transpose_shape_and_elements(cls):
    m = make(cls, 3, 2)
    t = m.transpose()
    assert t.shape == (2, 3)
    assert t.rewriter is rewriters.TRANSPOSE
    for r in range(3):
        for c in range(2):
            assert t.get(c, r) == m.get(r, c)


@pytest.mark.parametrize("cls", BACKENDS)
def test_double_transpose_is_identity(cls):
    m = make(cls, 3, 5)
    n = m.T.T
    assert n.shape == m.shape
    assert n.rewriter is rewriters.IDENTITY
    for r in range(3):
        for c in range(5):
            assert n.get(r, c) == m.get(r, c)


@pytest.mark.parametrize("cls", BACKENDS)
def test_transpose_update_is_shared(cls):
    m = cls.zeros(8, 8)
    t = m.T
    t.update(3, 6, 4.0)
    assert m.get(6, 3) == 4.0
    m.update(7, 5, 5.0)
    assert t.get(5, 7) == 5.0


@pytest.mark.parametrize("cls", BACKENDS)
def test_transpose_out_of_range_uses_logical_shape(cls):
    t = cls.zeros(3, 2).T
    t.get(1, 2)
    with pytest.raises(OutOfRangeError):
        t.get(2, 1)


@pytest.mark.parametrize("cls", BACKENDS)
def test_subview_mutation_visible_in_base(cls):
    m = make(cls)
    v = m.view(0, 0, 2, 2)
    v.update(0, 0, 9.0)
    assert m.get(0, 0) == 9.0


@pytest.mark.parametrize("cls", BACKENDS)
def test_subview_addresses_window(cls):
    m = make(cls)
    v = m.view(1, 2, 2, 2)
    assert v.shape == (2, 2)
    np.testing.assert_allclose(v.toarray(), m.toarray()[1:3, 2:4])
    m.update(2, 3, -1.0)
    assert v.get(1, 1) == -1.0


@pytest.mark.parametrize("cls", BACKENDS)
def test_view_of_view_composes_offsets(cls):
    m = make(cls, 5, 5)
    v = m.view(1, 1, 4, 4).view(1, 2, 2, 2)
    assert tuple(v.offset) == (2, 3)
    np.testing.assert_allclose(v.toarray(), m.toarray()[2:4, 3:5])


@pytest.mark.parametrize("cls", BACKENDS)
def test_view_out_of_base(cls):
    m = cls.zeros(4, 4)
    with pytest.raises(ViewOutOfBaseError):
        m.view(2, 2, 3, 3)
    with pytest.raises(ViewOutOfBaseError):
        m.view(-1, 0, 1, 1)


@pytest.mark.parametrize("cls", BACKENDS)
@pytest.mark.parametrize("rows,columns", [(0, 1), (1, 0), (-2, 2)])
def test_view_non_positive(cls, rows, columns):
    with pytest.raises(NonPositiveSizeError):
        cls.zeros(4, 4).view(0, 0, rows, columns)


@pytest.mark.parametrize("cls", BACKENDS)
def test_view_of_transpose(cls):
    m = make(cls, 3, 4)
    v = m.T.view(1, 0, 2, 3)
    np.testing.assert_allclose(v.toarray(), m.toarray().T[1:3, 0:3])
    v.update(0, 2, 100.0)
    assert m.get(2, 1) == 100.0


@pytest.mark.parametrize("cls", BACKENDS)
def test_transpose_of_view(cls):
    m = make(cls, 3, 4)
    v = m.view(1, 1, 2, 3).T
    assert v.shape == (3, 2)
    np.testing.assert_allclose(v.toarray(), m.toarray()[1:3, 1:4].T)


@pytest.mark.parametrize("cls", BACKENDS)
def test_row_and_column(cls):
    m = make(cls, 3, 4)
    r = m.row(1)
    c = m.column(2)
    assert r.shape == (1, 4)
    assert c.shape == (3, 1)
    np.testing.assert_allclose(r.toarray(), m.toarray()[1:2, :])
    np.testing.assert_allclose(c.toarray(), m.toarray()[:, 2:3])
    c.update(0, 0, 0.5)
    assert m.get(0, 2) == 0.5


@pytest.mark.parametrize("cls", BACKENDS)
def test_row_of_transpose(cls):
    m = make(cls, 3, 4)
    r = m.T.row(3)
    assert r.shape == (1, 3)
    np.testing.assert_allclose(r.toarray(), m.toarray().T[3:4, :])


@pytest.mark.parametrize("cls", BACKENDS)
def test_row_and_column_out_of_range(cls):
    m = cls.zeros(3, 4)
    with pytest.raises(OutOfRangeError):
        m.row(3)
    with pytest.raises(OutOfRangeError):
        m.column(4)


@pytest.mark.parametrize("cls", BACKENDS)
def test_base_restores_full_extent(cls):
    m = make(cls, 3, 4)
    b = m.view(1, 1, 1, 1).base()
    assert b.shape == (3, 4)
    assert not b.is_view
    np.testing.assert_allclose(b.toarray(), m.toarray())
    assert m.T.view(0, 0, 1, 1).base().shape == (4, 3)


@pytest.mark.parametrize("cls", BACKENDS)
def test_views_keep_storage_alive(cls):
    v = make(cls, 2, 2).view(1, 1, 1, 1)
    assert v.get(0, 0) == 4.0
