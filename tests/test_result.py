import pytest

from revgen import Result


def test_success():
    r = Result.success(3)
    assert r.ok and r
    assert r.unwrap() == 3
    assert r.value_or(0) == 3


def test_failure_unwrap_raises():
    r = Result.failure(ValueError("boom"))
    assert not r.ok
    assert r.value_or(0) == 0
    with pytest.raises(ValueError, match="boom"):
        r.unwrap()


def test_success_with_none_value_is_ok():
    r = Result.success(None)
    assert r.ok
    assert r.unwrap() is None
