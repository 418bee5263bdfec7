# coding=utf-8
import json

import pytest

from vmprofile.dataloader.trace_reader import (load_folded_profile, load_trace, parse_folded_lines,
                                              parse_trace_lines)
from vmprofile.errors import TraceFormatError, UnknownFunctionIdentityError
from vmprofile.model.event import Category, FunctionId
from vmprofile.process.call_tree import build_call_tree
from vmprofile.process.collapse import collapse
from vmprofile.process.profile import profile_from_tree
from vmprofile.util.constant import EventKind
from vmprofile.writers.flamegraph import write_flamegraph

TRACE_LINES = [
    '{"kind": "call", "name": "f", "category": "user"}',
    '',
    '{"kind": "call", "name": "g", "category": "user", "cost": 0}',
    '{"kind": "return", "cost": 5}',
    '{"kind": "call", "name": "g"}',
    '{"kind": "return", "cost": 3, "name": "g", "category": "user"}',
    '{"kind": "return", "cost": 2}',
]


def test_parse_trace_lines():
    events = parse_trace_lines(TRACE_LINES)

    assert len(events) == 6
    assert events[0].kind == EventKind.call
    assert events[0].identity == FunctionId("f", Category.USER)
    assert events[4].identity == FunctionId("g", Category.USER)
    assert events[5].identity == FunctionId("g", Category.USER)
    assert [event.cost for event in events] == [0, 0, 5, 0, 3, 2]


def test_parsed_trace_folds_like_in_memory_events():
    collapsed = collapse(build_call_tree(parse_trace_lines(TRACE_LINES)))

    assert write_flamegraph(profile_from_tree(collapsed)) == "f;g 8\nf 2\n"


def test_load_trace_accepts_jsonl_and_array(tmp_path):
    jsonl_path = tmp_path / "trace.jsonl"
    jsonl_path.write_text("\n".join(TRACE_LINES), encoding="utf-8")
    array_path = tmp_path / "trace.json"
    array_path.write_text(json.dumps([json.loads(line) for line in TRACE_LINES if line]), encoding="utf-8")

    assert load_trace(str(jsonl_path)) == load_trace(str(array_path))


@pytest.mark.parametrize("line", [
    '{"kind": "call", "name": "f", "cost": -1}',
    '{"kind": "call", "name": "f", "cost": 1.5}',
    '{"kind": "call", "name": "f", "cost": true}',
    '{"kind": "jump", "name": "f"}',
    '["call", "f"]',
    '{"kind": "call", "name": ',
])
def test_malformed_lines_are_rejected(line):
    with pytest.raises(TraceFormatError) as excinfo:
        parse_trace_lines(['{"kind": "call", "name": "main"}', line])
    assert excinfo.value.line_number == 2


@pytest.mark.parametrize("record", [
    {"kind": "call", "category": "user"},
    {"kind": "call", "name": "f", "category": "kernel"},
    {"kind": "call", "name": "", "category": "libfunc"},
])
def test_unresolved_functions_surface_in_the_builder(record):
    events = parse_trace_lines([json.dumps(record), '{"kind": "return"}'])

    assert events[0].identity is None
    with pytest.raises(UnknownFunctionIdentityError) as excinfo:
        build_call_tree(events)
    assert excinfo.value.event_index == 0


def test_parse_folded_lines():
    profile = parse_folded_lines([
        "main;fib;store_temp<felt252> [libfunc] 2\n",
        "main;core::array::append [corelib] 12\n",
        "\n",
        "main 1\n",
        "main 4\n",
    ])

    main = FunctionId("main", Category.USER)
    assert profile[(main,)] == 5
    assert profile[(main, FunctionId("core::array::append", Category.CORELIB))] == 12
    assert profile[(main, FunctionId("fib", Category.USER), FunctionId("store_temp<felt252>", Category.LIBFUNC))] == 2
    assert profile.total == 19


@pytest.mark.parametrize("line", ["main", "main;fib x", "main;;fib 3", "main -3"])
def test_malformed_folded_lines_are_rejected(line):
    with pytest.raises(TraceFormatError):
        parse_folded_lines([line])


def test_folded_profile_goes_through_collapse(tmp_path):
    path = tmp_path / "profile.folded"
    path.write_text("a;b;a 3\na;b 2\na 1\n", encoding="utf-8")

    collapsed = collapse(load_folded_profile(str(path)).to_call_tree())

    assert collapsed.cumulative_cost == 6
    assert write_flamegraph(profile_from_tree(collapsed)) == "a;b 2\na 4\n"


def test_folded_lines_tolerate_surrounding_whitespace():
    profile = parse_folded_lines(["a;b 12 \n", "  a 3\t\r\n"])

    a, b = FunctionId("a", Category.USER), FunctionId("b", Category.USER)
    assert profile[(a, b)] == 12
    assert profile[(a,)] == 3
