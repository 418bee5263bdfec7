# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：call_tree.py
Create Date: 2025/6/2 14:10
Notes:
    Rebuilds the call tree from a flat, well-nested call/return event stream.

    The stack starts with a synthetic root. A call pushes a child of the top frame,
    a return adds its cost to the top frame and pops it, handing the popped frame's
    cumulative cost up to the new top. The root must be the only frame left at the end.
"""
from typing import Iterable

from vmprofile.errors import UnbalancedTraceError, UnknownFunctionIdentityError
from vmprofile.model.event import Category, Event, ROOT_ID
from vmprofile.model.frame import CallFrame
from vmprofile.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)


class CallTreeBuilder:
    def __init__(self, merge_repeated_calls: bool = False):
        self.merge_repeated_calls = merge_repeated_calls
        self.root = CallFrame(ROOT_ID)
        # (frame, cumulative cost of the frame when it was pushed)
        self._stack = [(self.root, 0)]
        self._num_events = 0

    def feed(self, event: Event):
        index = self._num_events
        self._num_events += 1
        if event.cost < 0:
            raise ValueError(f"event #{index}: negative cost {event.cost}")
        if event.is_call:
            self._on_call(event, index)
        else:
            self._on_return(event, index)

    def _on_call(self, event: Event, index: int):
        identity = event.identity
        if identity is None or not identity.name:
            raise UnknownFunctionIdentityError("call to a function the tracer could not resolve", index)
        if identity.category not in Category.trace_categories():
            raise UnknownFunctionIdentityError(
                f"call to '{identity.name}' with unsupported category {identity.category!r}", index)

        parent, _ = self._stack[-1]
        frame = parent.add_child(identity, reuse=self.merge_repeated_calls)
        self._stack.append((frame, frame.cumulative_cost))
        frame.add_self_cost(event.cost)

    def _on_return(self, event: Event, index: int):
        if len(self._stack) == 1:
            raise UnbalancedTraceError("return without a matching call", index)

        frame, cumulative_at_push = self._stack[-1]
        if event.identity is not None and event.identity != frame.identity:
            raise UnbalancedTraceError(
                f"return from '{event.identity}' while '{frame.identity}' is on top of the stack", index)

        frame.add_self_cost(event.cost)
        self._stack.pop()
        parent, _ = self._stack[-1]
        # a reused frame is pushed more than once, only hand up what this activation added
        parent.cumulative_cost += frame.cumulative_cost - cumulative_at_push

    def finish(self) -> CallFrame:
        if len(self._stack) != 1:
            frame, _ = self._stack[-1]
            path = ";".join(str(identity) for identity in frame.path())
            raise UnbalancedTraceError(
                f"trace ended with {len(self._stack) - 1} unmatched call(s), innermost open path: {path}",
                self._num_events)
        logger.debug(f"built call tree from {self._num_events} events, total cost {self.root.cumulative_cost}")
        return self.root


def build_call_tree(events: Iterable[Event], merge_repeated_calls: bool = False) -> CallFrame:
    builder = CallTreeBuilder(merge_repeated_calls=merge_repeated_calls)
    for event in events:
        builder.feed(event)
    return builder.finish()
