"""Tests: FormatError payload, message and copying."""

import copy
import pickle

import pytest

from hostaddr.core.host import Host
from hostaddr.errors import FormatError, FormatErrorKind

pytestmark = [pytest.mark.core]


def test_message_and_fields():
    err = FormatError(FormatErrorKind.LEADING_ZERO, "01.2.3.4", "octet '01' has a leading zero")
    assert isinstance(err, ValueError)
    assert str(err) == "octet '01' has a leading zero: '01.2.3.4'"
    assert str(FormatError(FormatErrorKind.OUT_OF_RANGE, "x")) == "out of range: 'x'"
    assert err.args == (FormatErrorKind.LEADING_ZERO, "01.2.3.4", "octet '01' has a leading zero")


@pytest.mark.parametrize("clone", [lambda e: pickle.loads(pickle.dumps(e)), copy.copy, copy.deepcopy])
def test_errors_survive_pickle_and_copy(clone):
    with pytest.raises(FormatError) as exc:
        Host.parse("[::1]:99999")
    err = clone(exc.value)
    assert type(err) is FormatError
    assert err.kind is FormatErrorKind.OUT_OF_RANGE
    assert err.text == "[::1]:99999"
    assert err.detail == exc.value.detail
    assert str(err) == str(exc.value)
