# coding=utf-8

from .trace_reader import load_folded_profile, load_trace, parse_folded_lines, parse_trace_lines
