# coding=utf-8

from .flamegraph import write_flamegraph
from .pprof import build_pprof, write_pprof
