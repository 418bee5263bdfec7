# coding=utf-8
from tests.helpers import call, ret
from vmprofile.process.call_tree import build_call_tree
from vmprofile.process.collapse import collapse
from vmprofile.report.summary import SUMMARY_COLUMNS, category_summary, format_summary, function_summary


def test_function_summary(mixed_events):
    summary_df = function_summary(collapse(build_call_tree(mixed_events)))

    assert list(summary_df.columns) == SUMMARY_COLUMNS
    assert list(summary_df["function"]) == ["core::array::append", "fib", "store_temp<felt252>", "main"]
    by_function = summary_df.set_index("function")
    assert by_function.loc["main", "cumulative_cost"] == 24
    assert by_function.loc["fib", "cumulative_cost"] == 11
    assert by_function.loc["core::array::append", "category"] == "corelib"
    assert summary_df["self_cost"].sum() == 24
    assert abs(summary_df["self_percent"].sum() - 100.0) < 1e-9


def test_function_spread_over_several_paths_is_aggregated():
    events = [
        call("main"),
        call("a"), call("helper"), ret(2), ret(1),
        call("b"), call("helper"), ret(3), ret(1),
        ret(0),
    ]
    summary_df = function_summary(collapse(build_call_tree(events))).set_index("function")

    assert summary_df.loc["helper", "self_cost"] == 5
    assert summary_df.loc["helper", "cumulative_cost"] == 5
    assert summary_df.loc["main", "cumulative_cost"] == 7


def test_category_summary(mixed_events):
    totals = category_summary(function_summary(collapse(build_call_tree(mixed_events))))

    assert dict(zip(totals["category"], totals["self_cost"])) == {"corelib": 12, "user": 10, "libfunc": 2}
    assert list(totals["category"]) == ["corelib", "user", "libfunc"]


def test_format_summary(mixed_events):
    text = format_summary(function_summary(collapse(build_call_tree(mixed_events))), top=2)

    lines = text.splitlines()
    assert len(lines) == 3
    assert "core::array::append" in lines[1]
    assert "50.00%" in lines[1]


def test_empty_summary():
    summary_df = function_summary(collapse(build_call_tree([])))

    assert summary_df.empty
    assert format_summary(summary_df) == "no functions in profile"
