# coding=utf-8

from .event import Category, Event, FunctionId, ROOT_ID, parse_identity, render_identity
from .frame import CallFrame, CollapsedFrame, cost_is_conserved, iter_frames
