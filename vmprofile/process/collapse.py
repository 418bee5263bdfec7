# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：collapse.py
Create Date: 2025/6/3 9:40
Notes:
    Folds loop-repeated and recursive calls so that, in the result,
      - no two siblings share an identity (repetition collapse)
      - no root-to-leaf path contains an identity twice (recursion collapse)

    Observe this call tree:

      main -> loop -> step -> loop -> step
                   -> step
              loop -> step

    Both `loop` children of `main` merge into one node, every `step` below it merges
    into one child of that node, and the inner `loop` is folded into the outer one.
    The result is `main -> loop -> step`, with every self cost carried over.
"""
from typing import Dict, List

from vmprofile.model.event import FunctionId
from vmprofile.model.frame import CollapsedFrame
from vmprofile.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)


class _Node:
    __slots__ = ("identity", "self_cost", "children", "index")

    def __init__(self, identity: FunctionId):
        self.identity = identity
        self.self_cost = 0
        self.children: List["_Node"] = []
        self.index: Dict[FunctionId, "_Node"] = {}

    def child(self, identity: FunctionId) -> "_Node":
        node = self.index.get(identity)
        if node is None:
            node = _Node(identity)
            self.children.append(node)
            self.index[identity] = node
        return node


def _find_on_path(path: List[_Node], identity: FunctionId) -> int:
    for depth, node in enumerate(path):
        if node.identity == identity:
            return depth
    return -1


def _merge_into(source, path: List[_Node]):
    """Merge the children of `source` below path[-1].

    `path` holds the collapsed nodes from the root down to the target. A child whose
    identity is already on that path is folded into the matching ancestor, and its own
    children are merged below that ancestor.
    """
    work = [(source, path)]
    while work:
        src, dst_path = work.pop()
        target = dst_path[-1]
        # pushed reversed so that children are visited in order, keeping first-occurrence order
        pending = []
        for child in src.children:
            depth = _find_on_path(dst_path, child.identity)
            if depth >= 0:
                ancestor_path = dst_path[:depth + 1]
                ancestor_path[-1].self_cost += child.self_cost
                pending.append((child, ancestor_path))
            else:
                node = target.child(child.identity)
                node.self_cost += child.self_cost
                pending.append((child, dst_path + [node]))
        work.extend(reversed(pending))


def _freeze(top: _Node) -> CollapsedFrame:
    """Build the immutable tree bottom-up, children before their parent."""
    frozen: Dict[int, CollapsedFrame] = {}
    stack = [(top, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
            continue
        children = tuple(frozen.pop(id(child)) for child in node.children)
        cumulative = node.self_cost + sum(child.cumulative_cost for child in children)
        frozen[id(node)] = CollapsedFrame(node.identity, node.self_cost, cumulative, children)
    return frozen[id(top)]


def collapse(root) -> CollapsedFrame:
    """Collapse a CallFrame (or an already collapsed) tree. Never fails."""
    top = _Node(root.identity)
    top.self_cost = root.self_cost
    _merge_into(root, [top])
    collapsed = _freeze(top)
    logger.debug(f"collapsed tree, total cost {collapsed.cumulative_cost}")
    return collapsed
