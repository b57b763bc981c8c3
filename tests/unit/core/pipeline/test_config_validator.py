from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies:
1. Default injection for missing keys.
2. Lenient coercion with warnings.
3. Strict mode errors.
4. Destination prefix normalization.
"""

import pytest

from treenormalizer.core.pipeline.validator import validate_config
from treenormalizer.domain.config import get_default_config


def test_missing_keys_are_filled_with_defaults() -> None:
    cfg, warnings = validate_config({"sources": ["/a"]})

    assert cfg["sources"] == ["/a"]
    assert cfg["destination_dir"] == ""
    assert cfg["preserve_timestamps"] is True
    assert warnings == []


def test_non_dict_config_falls_back_to_defaults() -> None:
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert cfg == get_default_config()
    assert len(warnings) == 1


def test_lenient_coercions_produce_warnings() -> None:
    cfg, warnings = validate_config({
        "sources": "/a, /b ,",
        "preserve_timestamps": "no",
        "destination_dir": 42,
    })

    assert cfg["sources"] == ["/a", "/b"]
    assert cfg["preserve_timestamps"] is False
    assert cfg["destination_dir"] == ""
    assert len(warnings) == 3


def test_invalid_list_items_are_discarded() -> None:
    cfg, warnings = validate_config({"sources": ["/a", 3, "  ", "/b"]})

    assert cfg["sources"] == ["/a", "/b"]
    assert any("sources[1]" in w for w in warnings)


@pytest.mark.parametrize(
    "config",
    [
        {"sources": "/a"},
        {"preserve_timestamps": "yes"},
        {"into": 5},
        "not a dict",
    ],
)
def test_strict_mode_raises_on_type_mismatch(config) -> None:
    with pytest.raises(TypeError):
        validate_config(config, strict=True)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", ""),
        ("lib", "lib"),
        ("/lib/v1/", "lib/v1"),
        ("./lib//v1", "lib/v1"),
        ("lib\\v1", "lib/v1"),
    ],
)
def test_into_prefix_is_normalized(raw: str, expected: str) -> None:
    cfg, _ = validate_config({"into": raw})
    assert cfg["into"] == expected


def test_into_parent_references_are_removed_or_rejected() -> None:
    cfg, warnings = validate_config({"into": "../escape/x"})
    assert cfg["into"] == "escape/x"
    assert warnings

    with pytest.raises(ValueError):
        validate_config({"into": "../escape"}, strict=True)
