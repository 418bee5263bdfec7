# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：frame.py
Create Date: 2025/6/2 11:02
Notes:
    CallFrame is what the builder produces, CollapsedFrame what the collapse engine produces.
    Both keep cumulative_cost == self_cost + sum(child.cumulative_cost).
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from vmprofile.model.event import FunctionId


@dataclass(eq=False)
class CallFrame:
    identity: FunctionId
    self_cost: int = 0
    cumulative_cost: int = 0
    children: List["CallFrame"] = field(default_factory=list)
    parent: Optional["CallFrame"] = field(default=None, repr=False)
    _index: Dict[FunctionId, "CallFrame"] = field(default_factory=dict, repr=False)

    def add_child(self, identity: FunctionId, reuse: bool = False) -> "CallFrame":
        if reuse:
            existing = self._index.get(identity)
            if existing is not None:
                return existing
        child = CallFrame(identity, parent=self)
        self.children.append(child)
        self._index.setdefault(identity, child)
        return child

    def add_self_cost(self, cost: int):
        self.self_cost += cost
        self.cumulative_cost += cost

    def path(self) -> Tuple[FunctionId, ...]:
        """Identities from the root's first child down to this frame."""
        identities = []
        node = self
        while node.parent is not None:
            identities.append(node.identity)
            node = node.parent
        return tuple(reversed(identities))


@dataclass(frozen=True)
class CollapsedFrame:
    identity: FunctionId
    self_cost: int
    cumulative_cost: int
    children: Tuple["CollapsedFrame", ...] = ()

    def find_child(self, identity: FunctionId) -> Optional["CollapsedFrame"]:
        for child in self.children:
            if child.identity == identity:
                return child
        return None


def iter_frames(root) -> Iterator:
    """Pre-order walk over any frame tree."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def cost_is_conserved(root) -> bool:
    return all(
        node.cumulative_cost == node.self_cost + sum(child.cumulative_cost for child in node.children)
        for node in iter_frames(root)
    )
