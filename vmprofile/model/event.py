# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：event.py
Create Date: 2025/6/2 10:35
Notes:
    events of a VM execution trace and the identities they refer to
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from vmprofile.util.constant import ROOT_NAME, EventKind


class Category(Enum):
    USER = "user"
    CORELIB = "corelib"
    LIBFUNC = "libfunc"
    # only the builder's root carries this one
    SYNTHETIC = "synthetic"

    @classmethod
    def trace_categories(cls):
        return (cls.USER, cls.CORELIB, cls.LIBFUNC)


@dataclass(frozen=True)
class FunctionId:
    name: str
    category: Category

    def __str__(self):
        return render_identity(self)


ROOT_ID = FunctionId(ROOT_NAME, Category.SYNTHETIC)


@dataclass(frozen=True)
class Event:
    kind: str
    identity: Optional[FunctionId] = None
    cost: int = 0

    @classmethod
    def call(cls, name, category=Category.USER, cost=0):
        return cls(EventKind.call, FunctionId(name, category), cost)

    @classmethod
    def ret(cls, cost=0, identity=None):
        return cls(EventKind.ret, identity, cost)

    @property
    def is_call(self):
        return self.kind == EventKind.call


def render_identity(identity: FunctionId) -> str:
    """Stable text for an identity.

    User functions keep their plain name; the other categories get a suffix so
    that a user function and a libfunc with the same name never collide.
    """
    category = identity.category
    if category is Category.USER:
        return identity.name
    if category is Category.CORELIB:
        return f"{identity.name} [corelib]"
    if category is Category.LIBFUNC:
        return f"{identity.name} [libfunc]"
    if category is Category.SYNTHETIC:
        return f"[{identity.name}]"
    raise ValueError(f"unhandled category: {category!r}")


def parse_identity(text: str) -> FunctionId:
    """Inverse of render_identity."""
    for category in (Category.CORELIB, Category.LIBFUNC):
        suffix = f" [{category.value}]"
        if text.endswith(suffix) and len(text) > len(suffix):
            return FunctionId(text[:-len(suffix)], category)
    return FunctionId(text, Category.USER)
