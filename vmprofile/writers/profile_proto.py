# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：profile_proto.py
Create Date: 2025/6/4 14:00
Notes:
    Message classes for the pprof schema (perftools.profiles, profile.proto).
    The file descriptor is assembled here and registered in a private pool,
    the classes behave exactly like protoc generated ones.
"""
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "perftools.profiles"

_FD = descriptor_pb2.FieldDescriptorProto
INT64, UINT64, BOOL, STRING, MESSAGE = _FD.TYPE_INT64, _FD.TYPE_UINT64, _FD.TYPE_BOOL, _FD.TYPE_STRING, _FD.TYPE_MESSAGE
OPTIONAL, REPEATED = _FD.LABEL_OPTIONAL, _FD.LABEL_REPEATED

# message -> [(field, number, type, label, message type)]
SCHEMA = {
    "Profile": [
        ("sample_type", 1, MESSAGE, REPEATED, "ValueType"),
        ("sample", 2, MESSAGE, REPEATED, "Sample"),
        ("mapping", 3, MESSAGE, REPEATED, "Mapping"),
        ("location", 4, MESSAGE, REPEATED, "Location"),
        ("function", 5, MESSAGE, REPEATED, "Function"),
        ("string_table", 6, STRING, REPEATED, None),
        ("drop_frames", 7, INT64, OPTIONAL, None),
        ("keep_frames", 8, INT64, OPTIONAL, None),
        ("time_nanos", 9, INT64, OPTIONAL, None),
        ("duration_nanos", 10, INT64, OPTIONAL, None),
        ("period_type", 11, MESSAGE, OPTIONAL, "ValueType"),
        ("period", 12, INT64, OPTIONAL, None),
        ("comment", 13, INT64, REPEATED, None),
        ("default_sample_type", 14, INT64, OPTIONAL, None),
        ("doc_url", 15, INT64, OPTIONAL, None),
    ],
    "ValueType": [
        ("type", 1, INT64, OPTIONAL, None),
        ("unit", 2, INT64, OPTIONAL, None),
    ],
    "Sample": [
        ("location_id", 1, UINT64, REPEATED, None),
        ("value", 2, INT64, REPEATED, None),
        ("label", 3, MESSAGE, REPEATED, "Label"),
    ],
    "Label": [
        ("key", 1, INT64, OPTIONAL, None),
        ("str", 2, INT64, OPTIONAL, None),
        ("num", 3, INT64, OPTIONAL, None),
        ("num_unit", 4, INT64, OPTIONAL, None),
    ],
    "Mapping": [
        ("id", 1, UINT64, OPTIONAL, None),
        ("memory_start", 2, UINT64, OPTIONAL, None),
        ("memory_limit", 3, UINT64, OPTIONAL, None),
        ("file_offset", 4, UINT64, OPTIONAL, None),
        ("filename", 5, INT64, OPTIONAL, None),
        ("build_id", 6, INT64, OPTIONAL, None),
        ("has_functions", 7, BOOL, OPTIONAL, None),
        ("has_filenames", 8, BOOL, OPTIONAL, None),
        ("has_line_numbers", 9, BOOL, OPTIONAL, None),
        ("has_inline_frames", 10, BOOL, OPTIONAL, None),
    ],
    "Location": [
        ("id", 1, UINT64, OPTIONAL, None),
        ("mapping_id", 2, UINT64, OPTIONAL, None),
        ("address", 3, UINT64, OPTIONAL, None),
        ("line", 4, MESSAGE, REPEATED, "Line"),
        ("is_folded", 5, BOOL, OPTIONAL, None),
    ],
    "Line": [
        ("function_id", 1, UINT64, OPTIONAL, None),
        ("line", 2, INT64, OPTIONAL, None),
        ("column", 3, INT64, OPTIONAL, None),
    ],
    "Function": [
        ("id", 1, UINT64, OPTIONAL, None),
        ("name", 2, INT64, OPTIONAL, None),
        ("system_name", 3, INT64, OPTIONAL, None),
        ("filename", 4, INT64, OPTIONAL, None),
        ("start_line", 5, INT64, OPTIONAL, None),
    ],
}


def _file_descriptor_proto():
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = "profile.proto"
    file_proto.package = PACKAGE
    file_proto.syntax = "proto3"
    for message_name, fields in SCHEMA.items():
        message = file_proto.message_type.add()
        message.name = message_name
        for name, number, field_type, label, type_name in fields:
            field = message.field.add()
            field.name = name
            field.number = number
            field.type = field_type
            field.label = label
            if type_name:
                field.type_name = f".{PACKAGE}.{type_name}"
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_file_descriptor_proto().SerializeToString())


def _message_class(name):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Profile = _message_class("Profile")
ValueType = _message_class("ValueType")
Sample = _message_class("Sample")
Label = _message_class("Label")
Mapping = _message_class("Mapping")
Location = _message_class("Location")
Line = _message_class("Line")
Function = _message_class("Function")
