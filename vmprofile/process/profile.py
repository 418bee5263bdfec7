# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：profile.py
Create Date: 2025/6/3 15:05
Notes:
    Profile maps a call path (root excluded) to the self cost accumulated on it.
    Both exporters read a Profile, never the tree itself.
"""
from typing import Dict, Iterable, Iterator, List, Tuple

from vmprofile.model.event import Category, Event, FunctionId
from vmprofile.model.frame import CallFrame
from vmprofile.process.call_tree import CallTreeBuilder
from vmprofile.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)

CallPath = Tuple[FunctionId, ...]


class Profile:
    def __init__(self):
        self._costs: Dict[CallPath, int] = {}

    def add(self, path: Iterable[FunctionId], cost: int):
        path = tuple(path)
        if not path:
            raise ValueError("a profile entry needs at least one frame")
        if cost < 0:
            raise ValueError(f"negative cost {cost} for path {';'.join(map(str, path))}")
        self._costs[path] = self._costs.get(path, 0) + cost

    def items(self) -> Iterator[Tuple[CallPath, int]]:
        return iter(self._costs.items())

    def __len__(self):
        return len(self._costs)

    def __getitem__(self, path) -> int:
        return self._costs[tuple(path)]

    @property
    def total(self) -> int:
        return sum(self._costs.values())

    def identities(self) -> List[FunctionId]:
        """Distinct identities in order of first use."""
        seen = {}
        for path in self._costs:
            for identity in path:
                seen.setdefault(identity, None)
        return list(seen)

    def to_call_tree(self) -> CallFrame:
        """Rebuild a call tree, one activation per entry, sharing common prefixes."""
        builder = CallTreeBuilder(merge_repeated_calls=True)
        for path, cost in self._costs.items():
            for identity in path:
                builder.feed(Event.call(identity.name, identity.category))
            builder.feed(Event.ret(cost))
            for _ in path[1:]:
                builder.feed(Event.ret())
        return builder.finish()


def profile_from_tree(root, hide_categories=(), min_cost: int = 0) -> Profile:
    """Flatten a frame tree into a Profile.

    A frame's own entry comes after the entries of its children. It is written when
    the frame has a non-zero self cost or no children, so zero-cost leaves stay.

    Frames of a hidden category give their self cost to the nearest visible ancestor.
    A hidden frame directly below the root has no such ancestor and stays visible.
    Entries below `min_cost` are dropped afterwards.
    """
    hidden = frozenset(hide_categories)
    if Category.SYNTHETIC in hidden:
        raise ValueError("the synthetic root category cannot be hidden")

    profile = Profile()
    # (frame, visible path of the parent, cost collected for the visible owner, children done)
    stack = [(child, (), None, False) for child in reversed(root.children)]
    while stack:
        frame, parent_path, owner_cost, expanded = stack.pop()
        is_hidden = frame.identity.category in hidden and bool(parent_path)
        if is_hidden:
            path, own_cost = parent_path, owner_cost
        else:
            path = parent_path + (frame.identity,)
            own_cost = owner_cost if expanded else [0]
        if not expanded:
            stack.append((frame, parent_path, own_cost, True))
            stack.extend((child, path, own_cost, False) for child in reversed(frame.children))
            continue
        if is_hidden:
            # written with the visible owner's entry, after the owner's children
            owner_cost[0] += frame.self_cost
            continue
        cost = frame.self_cost + own_cost[0]
        if cost or not frame.children:
            profile.add(path, cost)

    if min_cost > 0:
        profile = _drop_below(profile, min_cost)
    return profile


def _drop_below(profile: Profile, min_cost: int) -> Profile:
    kept = Profile()
    dropped_entries, dropped_cost = 0, 0
    for path, cost in profile.items():
        if cost < min_cost:
            dropped_entries += 1
            dropped_cost += cost
            continue
        kept.add(path, cost)
    if dropped_entries:
        logger.info(f"min_cost={min_cost} dropped {dropped_entries} entries worth {dropped_cost}")
    return kept
