from __future__ import annotations

import pytest

from dafile.errors import (
    ConfigurationError,
    DAFileError,
    EncodingError,
    IntegrityError,
    ManifestFormatError,
    NotFound,
    StoreError,
)


@pytest.mark.parametrize(
    "cls, code, exit_code",
    [
        (DAFileError, "dafile_error", 1),
        (ConfigurationError, "configuration_error", 2),
        (EncodingError, "encoding_error", 1),
        (StoreError, "store_error", 1),
        (NotFound, "not_found", 1),
        (IntegrityError, "integrity_error", 1),
        (ManifestFormatError, "manifest_format", 1),
    ],
)
def test_codes_and_exit_codes(cls, code: str, exit_code: int) -> None:
    err = cls("boom")
    assert err.code == code
    assert err.exit_code == exit_code
    assert str(err) == f"{code}: boom"


def test_not_found_is_store_error() -> None:
    assert issubclass(NotFound, StoreError)


def test_to_problem() -> None:
    err = StoreError("chunk rejected", data={"chunk": 3})
    assert err.to_problem() == {
        "type": "urn:dafile:store_error",
        "title": "Store Error",
        "detail": "chunk rejected",
        "data": {"chunk": 3},
    }
    assert ConfigurationError().to_problem()["detail"] is None


def test_from_exc_and_custom_code() -> None:
    err = StoreError.from_exc(TimeoutError("slow node"), code="timeout", data={"chunk": 1})
    assert isinstance(err, StoreError)
    assert err.code == "timeout"
    assert err.message == "TimeoutError: slow node"
    assert err.data == {"chunk": 1}
