# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：trace_reader.py
Create Date: 2025/6/5 9:15
Notes:
    trace file: one JSON object per line (or a single JSON array of them)
        {"kind": "call", "name": "main", "category": "user", "cost": 0}
        {"kind": "return", "cost": 12}
    folded profile file: `a;b;c 12` lines as written by the flamegraph writer
"""
import json
from typing import Iterable, List, Optional

from vmprofile.errors import TraceFormatError
from vmprofile.model.event import Category, Event, FunctionId, parse_identity
from vmprofile.process.profile import Profile
from vmprofile.util.constant import EventKind
from vmprofile.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)

TRACE_CATEGORIES = {category.value: category for category in Category.trace_categories()}


def _parse_cost(value, line_number) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TraceFormatError(f"cost must be an integer, got {value!r}", line_number)
    if value < 0:
        raise TraceFormatError(f"cost must be non-negative, got {value}", line_number)
    return value


def _parse_identity(record, line_number) -> Optional[FunctionId]:
    name = record.get("name")
    category = TRACE_CATEGORIES.get(str(record.get("category", Category.USER.value)).lower())
    if not name or not isinstance(name, str) or category is None:
        # left for the builder to report with the event index
        logger.debug(f"line {line_number}: unresolved function {record!r}")
        return None
    return FunctionId(name, category)


def _parse_record(record, line_number) -> Event:
    if not isinstance(record, dict):
        raise TraceFormatError(f"expected a JSON object, got {type(record).__name__}", line_number)

    kind = str(record.get("kind", "")).lower()
    cost = _parse_cost(record.get("cost", 0), line_number)
    if kind == EventKind.call:
        return Event(EventKind.call, _parse_identity(record, line_number), cost)
    if kind == EventKind.ret:
        identity = _parse_identity(record, line_number) if "name" in record else None
        return Event(EventKind.ret, identity, cost)
    raise TraceFormatError(f"unknown event kind {record.get('kind')!r}", line_number)


def parse_trace_lines(lines: Iterable[str]) -> List[Event]:
    events = []
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise TraceFormatError(f"invalid JSON: {e}", line_number) from e
        events.append(_parse_record(record, line_number))
    return events


def load_trace(path: str) -> List[Event]:
    with open(path, "r", encoding="utf-8") as f:
        data = f.read()

    if data.lstrip().startswith("["):
        try:
            records = json.loads(data)
        except json.JSONDecodeError as e:
            raise TraceFormatError(f"invalid JSON array: {e}") from e
        events = [_parse_record(record, index + 1) for index, record in enumerate(records)]
    else:
        events = parse_trace_lines(data.splitlines())
    logger.info(f"loaded {len(events)} events from {path}")
    return events


def parse_folded_lines(lines: Iterable[str]) -> Profile:
    profile = Profile()
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        stack, sep, count = line.rpartition(" ")
        if not sep or not stack:
            raise TraceFormatError(f"invalid folded line: {line!r}", line_number)
        try:
            cost = int(count)
        except ValueError as e:
            raise TraceFormatError(f"failed to parse sample count: {count!r}", line_number) from e
        if cost < 0:
            raise TraceFormatError(f"cost must be non-negative, got {cost}", line_number)
        frames = stack.split(";")
        if any(not frame for frame in frames):
            raise TraceFormatError(f"empty frame in stack: {stack!r}", line_number)
        profile.add((parse_identity(frame) for frame in frames), cost)
    return profile


def load_folded_profile(path: str) -> Profile:
    with open(path, "r", encoding="utf-8") as f:
        profile = parse_folded_lines(f)
    logger.info(f"loaded {len(profile)} folded stacks from {path}")
    return profile
