# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：flamegraph.py
Create Date: 2025/6/4 10:30
Notes:
    folded stack output, one `frame;frame;frame cost` line per profile entry
"""
from typing import Dict

from vmprofile.errors import SerializationError
from vmprofile.model.event import FunctionId, render_identity
from vmprofile.process.profile import Profile
from vmprofile.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)

FORBIDDEN_CHARS = (";", "\n", "\r")


class IdentityRenderer:
    """Renders identities and checks that no two of them share a text."""

    def __init__(self):
        self._owners: Dict[str, FunctionId] = {}
        self._cache: Dict[FunctionId, str] = {}

    def __call__(self, identity: FunctionId) -> str:
        text = self._cache.get(identity)
        if text is not None:
            return text

        for char in FORBIDDEN_CHARS:
            if char in identity.name:
                raise SerializationError(f"function name contains {char!r}", identity.name)
        try:
            text = render_identity(identity)
        except ValueError as e:
            raise SerializationError(str(e), identity.name) from e

        owner = self._owners.setdefault(text, identity)
        if owner != identity:
            raise SerializationError(
                f"'{text}' would stand for both {owner.category.value} and {identity.category.value} functions",
                identity.name)
        self._cache[identity] = text
        return text


def write_flamegraph(profile: Profile) -> str:
    render = IdentityRenderer()
    lines = []
    for path, cost in profile.items():
        stack = ";".join(render(identity) for identity in path)
        lines.append(f"{stack} {cost}\n")
    logger.info(f"folded {len(lines)} stacks, total cost {profile.total}")
    return "".join(lines)
