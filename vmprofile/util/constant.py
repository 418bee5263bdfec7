# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：constant.py
Create Date: 2025/6/2 10:12
Notes:

"""
import os

import numpy as np

DEFAULT_CONFIG_PATH = os.getenv("VMPROFILE_CONFIG", "/etc/vmprofile/config/profile_config.json")

INT64_MAX = int(np.iinfo(np.int64).max)

ROOT_NAME = "root"


class OutputType:
    flamegraph = "flamegraph"
    pprof = "pprof"

    @classmethod
    def choices(cls):
        return [cls.flamegraph, cls.pprof]


class EventKind:
    call = "call"
    ret = "return"


class PprofDefaults:
    sample_type = "cost"
    sample_unit = "count"
    mapping_filename = "vm-program"
    mapping_id = 1
    # 没有真实的二进制映射，地址只用于区分location
    memory_limit = 0x7fffffff
    gzip_mtime = 0


DEFAULT_CONFIG = {
    "output_type": OutputType.flamegraph,
    "hide_categories": [],
    "min_cost": 0,
    "merge_repeated_calls": False,
    "sample_type": PprofDefaults.sample_type,
    "sample_unit": PprofDefaults.sample_unit,
    "summary_top": 0,
}
