from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import List

from winfirstboot.util.normalize import normalize


def test_none_stays_none() -> None:
    assert normalize(None) is None


def test_empty_sequence_stays_a_sequence() -> None:
    assert normalize([]) == []
    assert normalize(()) == []


def test_mapping_with_nested_sequence() -> None:
    result = normalize({"a": 1, "b": [2, 3]})

    assert result == {"a": 1, "b": [2, 3]}
    assert isinstance(result["b"], list)


def test_scalars_pass_through() -> None:
    for value in ("text", b"raw", 7, 2.5, True):
        assert normalize(value) == value


def test_parsed_namespace_tree_becomes_plain_dicts() -> None:
    raw = json.loads(
        '{"disk": {"label": "Data", "sizes": [1, {"gb": 2}]}, "names": []}',
        object_hook=lambda obj: SimpleNamespace(**obj),
    )

    assert normalize(raw) == {"disk": {"label": "Data", "sizes": [1, {"gb": 2}]}, "names": []}


@dataclass
class _Adapter:
    name: str
    aliases: List[str] = field(default_factory=list)


def test_dataclass_records_become_mappings() -> None:
    result = normalize([_Adapter("Ethernet", ["eth0"]), _Adapter("Ethernet 2")])

    assert result == [{"name": "Ethernet", "aliases": ["eth0"]}, {"name": "Ethernet 2", "aliases": []}]


def test_generators_and_tuples_keep_length_and_order() -> None:
    assert normalize(x * 2 for x in range(3)) == [0, 2, 4]
    assert normalize(("c", ("d", None))) == ["c", ["d", None]]


def test_underscore_keys_survive() -> None:
    raw = json.loads(
        '{"_comment": "lab", "disk": {"_note": 1, "label": "X"}}',
        object_hook=lambda obj: SimpleNamespace(**obj),
    )

    assert normalize(raw) == {"_comment": "lab", "disk": {"_note": 1, "label": "X"}}


def test_deep_nesting() -> None:
    value: object = "leaf"
    for _ in range(50):
        value = {"child": [value]}

    result = normalize(value)
    for _ in range(50):
        result = result["child"][0]
    assert result == "leaf"
