# coding=utf-8
from vmprofile.model.event import Category, Event


def call(name, category=Category.USER, cost=0):
    return Event.call(name, category, cost)


def ret(cost=0):
    return Event.ret(cost)


def make_call_tree_events(depth, name="rec", cost=1):
    events = [call(name) for _ in range(depth)]
    events.extend(ret(cost) for _ in range(depth))
    return events


def make_chain_events(depth, cost=1):
    """fn0 calls fn1 calls ... fn{depth-1}, every one of them a distinct function."""
    events = [call(f"fn{level}") for level in range(depth)]
    events.extend(ret(cost) for _ in range(depth))
    return events
