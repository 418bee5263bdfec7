# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：summary.py
Create Date: 2025/6/6 11:20
Notes:
    per function cost table, the same figures `pprof -top` shows
"""
import pandas as pd

from vmprofile.model.event import Category
from vmprofile.model.frame import iter_frames
from vmprofile.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)

SUMMARY_COLUMNS = ["function", "category", "self_cost", "cumulative_cost", "self_percent"]


def function_summary(collapsed_root) -> pd.DataFrame:
    """Aggregate self and cumulative cost per function over a collapsed tree.

    A collapsed path holds each identity at most once, so adding up the cumulative
    cost of every node of one function never counts a cost twice.
    """
    records = [
        {
            "function": frame.identity.name,
            "category": frame.identity.category.value,
            "self_cost": frame.self_cost,
            "cumulative_cost": frame.cumulative_cost,
        }
        for frame in iter_frames(collapsed_root)
        if frame.identity.category is not Category.SYNTHETIC
    ]
    if not records:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    data_df = pd.DataFrame(records)
    data_df = data_df.groupby(["function", "category"], as_index=False, sort=False).agg(
        self_cost=("self_cost", "sum"), cumulative_cost=("cumulative_cost", "sum"))
    total = collapsed_root.cumulative_cost
    data_df["self_percent"] = data_df["self_cost"] * 100.0 / total if total else 0.0
    data_df = data_df.sort_values(["self_cost", "function"], ascending=[False, True], kind="mergesort")
    return data_df.reset_index(drop=True)[SUMMARY_COLUMNS]


def category_summary(summary_df: pd.DataFrame) -> pd.DataFrame:
    grouped = summary_df.groupby("category", as_index=False).agg(
        functions=("function", "count"), self_cost=("self_cost", "sum"))
    return grouped.sort_values("self_cost", ascending=False, kind="mergesort").reset_index(drop=True)


def format_summary(summary_df: pd.DataFrame, top: int = 20) -> str:
    if summary_df.empty:
        return "no functions in profile"
    shown = summary_df.head(top).copy()
    shown["self_percent"] = shown["self_percent"].map(lambda value: f"{value:.2f}%")
    return shown.to_string(index=False)
