# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：errors.py
Create Date: 2025/6/2 10:20
Notes:
    all errors raised while turning a trace into a profile derive from ProfilerError
"""


class ProfilerError(Exception):
    pass


class UnbalancedTraceError(ProfilerError):
    def __init__(self, message, event_index=None):
        if event_index is not None:
            message = f"event #{event_index}: {message}"
        super().__init__(message)
        self.event_index = event_index


class UnknownFunctionIdentityError(ProfilerError):
    def __init__(self, message, event_index=None):
        if event_index is not None:
            message = f"event #{event_index}: {message}"
        super().__init__(message)
        self.event_index = event_index


class SerializationError(ProfilerError):
    def __init__(self, message, identity=None):
        if identity is not None:
            message = f"{message} (function: {identity})"
        super().__init__(message)
        self.identity = identity


class TraceFormatError(ProfilerError):
    def __init__(self, message, line_number=None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
