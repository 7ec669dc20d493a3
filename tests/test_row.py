"""Tests for rreftools.row module."""
import copy

import pytest

from rreftools.errors import EmptyInputError, InvalidInputError, NumericDegeneracyError
from rreftools.row import Row, compare_rows, sort_rows


# --- construction ---

def test_row_from_buffer_pivot():
    r = Row([0.0, 3.0, 1.0])
    assert r.width == 3
    assert r.pivot_column == 1
    assert r.is_zero is False
    assert r.is_nonzero() is True


def test_row_all_zero():
    r = Row([0, 0, 0])
    assert r.pivot_column is None
    assert r.is_zero is True
    assert r.is_nonzero() is False


def test_row_pivot_in_last_column():
    r = Row([0, 0, 5])
    assert r.pivot_column == 2


def test_row_copies_buffer():
    buf = [1.0, 2.0]
    r = Row(buf)
    r[0] = 9.0
    assert buf == [1.0, 2.0]


def test_row_width_mismatch():
    with pytest.raises(InvalidInputError):
        Row([1, 2, 3], 2)


def test_row_empty_buffer():
    with pytest.raises(InvalidInputError):
        Row([])


def test_row_none_buffer():
    with pytest.raises(InvalidInputError):
        Row(None)


def test_row_rejects_nan():
    with pytest.raises(InvalidInputError):
        Row([1.0, float("nan")])


def test_row_from_tokens():
    r = Row.from_tokens(["1", "-2.5", "0"], 3)
    assert r.to_list() == [1.0, -2.5, 0.0]
    assert r.pivot_column == 0


def test_row_from_tokens_empty():
    with pytest.raises(EmptyInputError):
        Row.from_tokens([], 3)


def test_row_from_tokens_wrong_count():
    with pytest.raises(InvalidInputError):
        Row.from_tokens(["1", "2"], 3)


def test_row_from_tokens_lenient():
    r = Row.from_tokens(["abc", "2x"], 2, lenient=True)
    assert r.to_list() == [0.0, 2.0]
    assert r.pivot_column == 1


def test_row_tiny_entries_are_kept():
    r = Row([1e-14, 2.0], zero_tol=1e-10)
    assert r.pivot_column == 0
    assert r[0] == 1e-14


@pytest.mark.parametrize("bad", [["3", 1.0], [None, 1.0], [1.0, object()], [1.0, b"2"]])
def test_row_rejects_non_numeric_entries(bad):
    with pytest.raises(InvalidInputError, match="entry"):
        Row(bad)


def test_row_non_numeric_error_names_index():
    with pytest.raises(InvalidInputError, match="entry 2"):
        Row([1.0, 2.0, "x"])


def test_setitem_rejects_text():
    r = Row([1.0, 2.0])
    with pytest.raises(InvalidInputError):
        r[0] = "5"
    assert r.to_list() == [1.0, 2.0]


def test_row_negative_tol():
    with pytest.raises(ValueError):
        Row([1.0], zero_tol=-1.0)


# --- ordering ---

def test_compare_zero_rows_equal():
    assert compare_rows(Row([0, 0]), Row([0, 0])) == 0


def test_compare_zero_smaller_than_nonzero():
    z, nz = Row([0, 0]), Row([0, 1])
    assert compare_rows(z, nz) == -1
    assert compare_rows(nz, z) == 1


def test_compare_by_pivot():
    a, b = Row([1, 0]), Row([0, 1])
    assert compare_rows(a, b) == -1
    assert compare_rows(b, a) == 1


def test_compare_same_pivot_different_contents_equal():
    assert compare_rows(Row([1, 2]), Row([5, -7])) == 0


def test_sort_rows_zero_first_and_stable():
    a = Row([0, 1, 0])
    b = Row([0, 0, 0])
    c = Row([2, 0, 0])
    d = Row([3, 1, 1])
    out = sort_rows([a, b, c, d])
    assert out[0] is b
    assert out[1] is c and out[2] is d  # same pivot, input order kept
    assert out[3] is a


def test_sort_key_matches_compare():
    rows = [Row([0, 1]), Row([0, 0]), Row([1, 0])]
    assert sorted(rows, key=Row.sort_key) == sort_rows(rows)


def test_row_has_no_truthiness_override():
    assert not hasattr(Row, "__bool__")


# --- arithmetic ---

def test_scale_and_divide():
    r = Row([2, 4])
    r.scale(0.5)
    assert r.to_list() == [1.0, 2.0]
    r.divide(2)
    assert r.to_list() == [0.5, 1.0]


def test_divide_by_zero():
    with pytest.raises(NumericDegeneracyError):
        Row([1, 2]).divide(0)


def test_add_refreshes_pivot():
    r = Row([1, 2])
    r.add(Row([-1, 0]))
    assert r.to_list() == [0.0, 2.0]
    assert r.pivot_column == 1


def test_add_width_mismatch():
    with pytest.raises(InvalidInputError):
        Row([1, 2]).add(Row([1, 2, 3]))


def test_eliminate_using_zeroes_column():
    r1 = Row([2, 4, 6])
    r2 = Row([1, 3, 5])
    r1.eliminate_using(r2, 0)
    # k = -1/2 -> [-1, -2, -3] + [1, 3, 5]
    assert r1.to_list() == [0.0, 1.0, 2.0]
    assert r1.pivot_column == 1
    assert r2.to_list() == [1.0, 3.0, 5.0]


def test_eliminate_using_exact_zero_after_rounding():
    r1 = Row([3.0, 1.0])
    r2 = Row([0.1, 0.7])
    r1.eliminate_using(r2, 0)
    assert r1[0] == 0.0
    assert r1.pivot_column == 1


def test_add_cancellation_residue_becomes_zero():
    r = Row([1.0, 0.1 + 0.2])
    r.add(Row([-1.0, -0.3]))
    assert r.to_list() == [0.0, 0.0]
    assert r.is_zero


def test_eliminate_using_keeps_small_uncancelled_entry():
    # k = -1e-8, so the first entry becomes k * 1e-4 = -1e-12 with nothing to
    # cancel against; it stays the pivot
    r = Row([1e-4, 1e4])
    r.eliminate_using(Row([0.0, 1e-4]), 1)
    assert r[0] == pytest.approx(-1e-12, rel=1e-12)
    assert r[1] == 0.0
    assert r.pivot_column == 0


def test_eliminate_using_zero_own_entry():
    with pytest.raises(NumericDegeneracyError):
        Row([0, 1]).eliminate_using(Row([1, 1]), 0)


def test_normalize():
    r = Row([0, -4, 2])
    r.normalize()
    assert r.to_list() == [0.0, 1.0, -0.5]
    assert r[1] == 1.0


def test_normalize_zero_row_noop():
    r = Row([0, 0])
    r.normalize()
    assert r.to_list() == [0.0, 0.0]


def test_setitem_refreshes():
    r = Row([1, 0])
    r[0] = 0
    assert r.is_zero


def test_index_out_of_range():
    with pytest.raises(IndexError):
        Row([1, 2])[5]


# --- copy / display ---

def test_copy_is_deep():
    r = Row([1, 2])
    c = copy.copy(r)
    d = copy.deepcopy(r)
    c[0] = 7
    assert r[0] == 1.0
    assert d.to_list() == [1.0, 2.0]
    assert c.pivot_column == 0


def test_format_snaps_small_entries():
    r = Row([1.0, 0.0004, -2.5], zero_tol=0.0)
    assert r.format() == "1.00 0.00 -2.50"
    assert r[1] == 0.0004
