from __future__ import annotations

import hashlib

import pytest

from pbxref.config import GeneratorSettings
from pbxref.identifiers import compose


def test_compose_single_element_matches_md5() -> None:
    assert compose(["abc"]) == "900150983CD24FB0D6963F7D28E17F72"


def test_compose_joins_with_separator() -> None:
    expected = hashlib.md5("PBXProject-App".encode("utf-8")).hexdigest().upper()
    assert compose(["PBXProject", "App"]) == expected


def test_compose_is_order_sensitive() -> None:
    assert compose(["PBXGroup", "A", "B"]) != compose(["PBXGroup", "B", "A"])


def test_compose_is_deterministic() -> None:
    chain = ["PBXFileReference", "App", "Sources", "main.ext"]
    assert compose(chain) == compose(list(chain))
    assert compose(chain) == compose(tuple(chain))


def test_compose_honours_settings() -> None:
    settings = GeneratorSettings(separator="/", algorithm="sha1", uppercase=False)
    expected = hashlib.sha1("PBXGroup/App".encode("utf-8")).hexdigest()
    assert compose(["PBXGroup", "App"], settings) == expected


def test_compose_rejects_empty_chain() -> None:
    with pytest.raises(ValueError):
        compose([])
