# coding=utf-8
import gzip

import pytest

from vmprofile.errors import SerializationError
from vmprofile.model.event import Category, FunctionId
from vmprofile.process.call_tree import build_call_tree
from vmprofile.process.collapse import collapse
from vmprofile.process.profile import Profile, profile_from_tree
from vmprofile.util.constant import INT64_MAX
from vmprofile.writers import profile_proto
from vmprofile.writers.pprof import build_pprof, write_pprof


def decode(payload):
    return profile_proto.Profile.FromString(gzip.decompress(payload))


def stacks(message):
    """Sample stacks as function names, root first."""
    strings = message.string_table
    function_names = {function.id: strings[function.name] for function in message.function}
    location_functions = {location.id: location.line[0].function_id for location in message.location}
    return [
        ([function_names[location_functions[location_id]] for location_id in reversed(sample.location_id)],
         list(sample.value))
        for sample in message.sample
    ]


@pytest.fixture
def mixed_profile(mixed_events):
    collapsed = collapse(build_call_tree(mixed_events))
    return collapsed, profile_from_tree(collapsed)


def test_round_trip_keeps_total(mixed_profile):
    collapsed, profile = mixed_profile
    message = decode(write_pprof(profile))

    assert sum(sample.value[0] for sample in message.sample) == collapsed.cumulative_cost == 24


def test_samples_list_locations_leaf_first(loop_events):
    profile = profile_from_tree(collapse(build_call_tree(loop_events)))
    message = decode(write_pprof(profile))

    assert stacks(message) == [(["f", "g"], [8]), (["f"], [2])]
    first = message.sample[0]
    leaf_location = next(location for location in message.location if location.id == first.location_id[0])
    leaf_function = next(function for function in message.function if function.id == leaf_location.line[0].function_id)
    assert message.string_table[leaf_function.name] == "g"


def test_functions_and_locations_are_deduplicated(mixed_profile):
    _, profile = mixed_profile
    message = build_pprof(profile)
    strings = message.string_table

    keys = [(strings[function.name], strings[function.filename]) for function in message.function]
    assert len(keys) == len(set(keys)) == 4
    assert len(message.location) == len(message.function)
    assert len({location.line[0].function_id for location in message.location}) == len(message.location)
    assert [function.id for function in message.function] == [1, 2, 3, 4]


def test_category_is_kept_in_function_table(mixed_profile):
    _, profile = mixed_profile
    message = build_pprof(profile)
    strings = message.string_table

    by_name = {strings[function.name]: function for function in message.function}
    assert strings[by_name["store_temp<felt252>"].filename] == "libfunc"
    assert strings[by_name["store_temp<felt252>"].system_name] == "store_temp<felt252> [libfunc]"
    assert strings[by_name["core::array::append"].filename] == "corelib"
    assert strings[by_name["main"].filename] == "user"


def test_same_name_different_category_gets_two_functions():
    profile = Profile()
    profile.add([FunctionId("hash", Category.USER)], 1)
    profile.add([FunctionId("hash", Category.USER), FunctionId("hash", Category.LIBFUNC)], 2)
    message = build_pprof(profile)

    assert len(message.function) == 2
    assert len(message.location) == 2


def test_string_table_and_mapping(mixed_profile):
    _, profile = mixed_profile
    message = build_pprof(profile, sample_type="steps", sample_unit="count")
    strings = message.string_table

    assert strings[0] == ""
    assert len(strings) == len(set(strings))
    (value_type,) = message.sample_type
    assert (strings[value_type.type], strings[value_type.unit]) == ("steps", "count")
    (mapping,) = message.mapping
    assert mapping.id == 1
    assert all(location.mapping_id == mapping.id for location in message.location)


def test_large_values_stay_exact():
    profile = Profile()
    profile.add([FunctionId("f", Category.USER)], INT64_MAX)
    message = decode(write_pprof(profile))

    assert message.sample[0].value[0] == INT64_MAX


def test_overflowing_value_is_rejected():
    profile = Profile()
    profile.add([FunctionId("f", Category.USER)], INT64_MAX + 1)

    with pytest.raises(SerializationError):
        write_pprof(profile)


def test_output_is_deterministic(mixed_profile):
    _, profile = mixed_profile

    assert write_pprof(profile) == write_pprof(profile)
