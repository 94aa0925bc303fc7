"""
Shared fixtures for the aidl2 tests.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from aidl2.log import LOGGER_NAME
from aidl2.pipeline.analyzer import load_known_parcelables
from aidl2.pipeline.marshal import CallSite, EncodeContext, Phase, encode
from aidl2.pipeline.parser import Argument, Direction, ImportEntry, ImportKind, Tokenizer

TEST_DATA = Path(__file__).parent / "test_data"

IMPORTS = [
    ImportEntry(ImportKind.PARCELABLE, "com.example.Payload"),
    ImportEntry(ImportKind.SERIALIZABLE, "com.example.Settings"),
    ImportEntry(ImportKind.INTERFACE, "com.example.IListener"),
    ImportEntry(ImportKind.IMPORT, "com.example.LocalParcelable"),
    ImportEntry(ImportKind.IMPORT, "java.util.List"),
]


class StubSourceTree:
    """In-memory stand-in for SourceTree; counts lookups."""

    def __init__(self, existing=()):
        self.existing = set(existing)
        self.calls: list[tuple[str, str]] = []

    def __call__(self, typename: str, package: str) -> bool:
        self.calls.append((typename, package))
        return typename in self.existing or f"{package}.{typename}" in self.existing


@pytest.fixture
def source_lookup():
    return StubSourceTree({"com.example.LocalParcelable"})


@pytest.fixture
def context(source_lookup):
    """An encode context for package com.example with a few imports."""
    return EncodeContext(
        package="com.example",
        imports=list(IMPORTS),
        known_parcelables=load_known_parcelables(),
        source_lookup=source_lookup,
        tokens=Tokenizer.tokenize("", "IFoo.aidl2"),
    )


@pytest.fixture
def fragment(context):
    """
    Factory producing one fragment.

    ``fragment("int", "in", "dispatcher", "pre")`` encodes a fresh argument
    named ``value``.
    """

    def make(type_name, direction, call_site, phase, name="value"):
        argument = Argument(Direction.from_value(direction), type_name, name)
        return encode(CallSite(call_site), Phase(phase), argument, name, context)

    return make


@pytest.fixture
def sample_project(tmp_path):
    """A copy of the sample project in a temporary directory."""
    project = tmp_path / "project"
    for path in (TEST_DATA / "sample").rglob("*"):
        if path.is_file():
            target = project / path.relative_to(TEST_DATA / "sample")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(path.read_text(encoding="utf-8"), encoding="utf-8")
    return project


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging so handlers never outlive a test's captured streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
