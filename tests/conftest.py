# coding=utf-8
import pytest

from tests.helpers import call, ret
from vmprofile.model.event import Category


@pytest.fixture
def loop_events():
    """f calls g twice, g costs 5 then 3, f itself costs 2."""
    return [call("f"), call("g"), ret(5), call("g"), ret(3), ret(2)]


@pytest.fixture
def mixed_events():
    """main -> fib (recursive) -> store_temp libfunc, plus a corelib helper called in a loop."""
    return [
        call("main"),
        call("fib"),
        call("store_temp<felt252>", Category.LIBFUNC), ret(1),
        call("fib"),
        call("store_temp<felt252>", Category.LIBFUNC), ret(1),
        call("fib"), ret(4),
        ret(3),
        ret(2),
        call("core::array::append", Category.CORELIB), ret(6),
        call("core::array::append", Category.CORELIB), ret(6),
        ret(1),
    ]
