#!/usr/bin/python3
# ******************************************************************************
# Copyright (c) 2022 Huawei Technologies Co., Ltd.
# gala-anteater is licensed under Mulan PSL v2.
# You can use this software according to the terms and conditions of the Mulan PSL v2.
# You may obtain a copy of Mulan PSL v2 at:
#          http://license.coscl.org.cn/MulanPSL2
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND,
# EITHER EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT,
# MERCHANTABILITY OR FIT FOR A PARTICULAR PURPOSE.
# See the Mulan PSL v2 for more details.
# ******************************************************************************/

from glob import glob

from setuptools import setup, find_packages

setup(
    name="vmtrace_profiler",
    version="1.0.0",
    description="Flamegraph and pprof profiles from VM call/return traces",
    keywords=["Profiling", "Flamegraph", "pprof", "Call Tree"],
    packages=find_packages(where=".", exclude=("tests", "tests.*")),
    python_requires=">=3.8",
    data_files=[
        ('etc/vmprofile/config/', glob('config/profile_config.json')),
    ],
    install_requires=[
        "numpy",
        "pandas",
        "protobuf>=4.24",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "vmprofile=vmprofile.main:main",
        ]
    }
)
