"""Smoke tests for package import and version."""

import recfuzz


def test_import_package() -> None:
    assert isinstance(recfuzz, object)


def test_version() -> None:
    assert recfuzz.__version__ == "0.1.0"


def test_public_api_exported() -> None:
    for name in recfuzz.__all__:
        assert hasattr(recfuzz, name), name
