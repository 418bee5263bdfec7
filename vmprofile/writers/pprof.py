# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：pprof.py
Create Date: 2025/6/4 15:20
Notes:
    pprof output. Every identity gets exactly one Function and one Location, every
    profile entry becomes one Sample whose locations run from leaf to root.
"""
import gzip
from typing import Dict

from google.protobuf.message import EncodeError

from vmprofile.errors import SerializationError
from vmprofile.model.event import Category, FunctionId
from vmprofile.process.profile import Profile
from vmprofile.util.constant import INT64_MAX, PprofDefaults
from vmprofile.util.logging_utils import get_default_logger
from vmprofile.writers import profile_proto
from vmprofile.writers.flamegraph import IdentityRenderer

logger = get_default_logger(__name__)


class StringTable:
    def __init__(self, message):
        self._message = message
        self._index: Dict[str, int] = {}
        self.intern("")

    def intern(self, value: str) -> int:
        index = self._index.get(value)
        if index is None:
            index = len(self._message.string_table)
            self._message.string_table.append(value)
            self._index[value] = index
        return index


def _category_filename(category: Category) -> str:
    if category is Category.USER:
        return "user"
    if category is Category.CORELIB:
        return "corelib"
    if category is Category.LIBFUNC:
        return "libfunc"
    raise SerializationError(f"category {category!r} cannot appear in a profile")


class PprofBuilder:
    def __init__(self, sample_type=PprofDefaults.sample_type, sample_unit=PprofDefaults.sample_unit):
        self.message = profile_proto.Profile()
        self.strings = StringTable(self.message)
        self.render = IdentityRenderer()
        self._locations: Dict[FunctionId, int] = {}

        value_type = self.message.sample_type.add()
        value_type.type = self.strings.intern(sample_type)
        value_type.unit = self.strings.intern(sample_unit)
        self.message.default_sample_type = value_type.type

        mapping = self.message.mapping.add()
        mapping.id = PprofDefaults.mapping_id
        mapping.memory_start = 0
        mapping.memory_limit = PprofDefaults.memory_limit
        mapping.filename = self.strings.intern(PprofDefaults.mapping_filename)
        mapping.has_functions = True

    def location_id(self, identity: FunctionId) -> int:
        location_id = self._locations.get(identity)
        if location_id is not None:
            return location_id

        function_id = len(self.message.function) + 1
        function = self.message.function.add()
        function.id = function_id
        function.name = self.strings.intern(identity.name)
        function.system_name = self.strings.intern(self.render(identity))
        function.filename = self.strings.intern(_category_filename(identity.category))

        location_id = len(self.message.location) + 1
        location = self.message.location.add()
        location.id = location_id
        location.mapping_id = PprofDefaults.mapping_id
        # synthetic, one address per function
        location.address = location_id
        line = location.line.add()
        line.function_id = function_id

        self._locations[identity] = location_id
        return location_id

    def add_sample(self, path, cost: int):
        if cost > INT64_MAX:
            raise SerializationError(f"cost {cost} does not fit in a 64-bit integer", self.render(path[-1]))
        sample = self.message.sample.add()
        sample.location_id.extend(self.location_id(identity) for identity in reversed(path))
        try:
            sample.value.append(cost)
        except ValueError as e:
            raise SerializationError(f"pprof encoder rejected value {cost}: {e}", self.render(path[-1])) from e


def build_pprof(profile: Profile, sample_type=PprofDefaults.sample_type, sample_unit=PprofDefaults.sample_unit):
    builder = PprofBuilder(sample_type, sample_unit)
    total = 0
    for path, cost in profile.items():
        builder.add_sample(path, cost)
        total += cost
    if total > INT64_MAX:
        logger.warning(f"total cost {total} exceeds the 64-bit range, pprof viewers may overflow when summing")
    logger.info(f"pprof profile with {len(builder.message.sample)} samples, "
                f"{len(builder.message.function)} functions, total cost {total}")
    return builder.message


def write_pprof(profile: Profile, sample_type=PprofDefaults.sample_type,
                sample_unit=PprofDefaults.sample_unit) -> bytes:
    message = build_pprof(profile, sample_type, sample_unit)
    try:
        payload = message.SerializeToString()
    except EncodeError as e:
        raise SerializationError(f"failed to encode pprof profile: {e}") from e
    return gzip.compress(payload, mtime=PprofDefaults.gzip_mtime)
