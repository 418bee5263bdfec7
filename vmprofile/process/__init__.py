# coding=utf-8

from .call_tree import CallTreeBuilder, build_call_tree
from .collapse import collapse
from .profile import Profile, profile_from_tree
