# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Interface layer: metadata tags, method descriptors, parameter bags, resolution.

- annotations: verb/body/parameter tags used to declare interfaces
- descriptor: MethodDescriptor tables built by introspection
- params: Params bag and build_params
- resolver: resolve a descriptor to a call strategy and URL fragment
"""

from .annotations import DELETE, GET, JSON, PATCH, POST, PUT, Arg, MethodTag, args, http_tag
from .descriptor import InterfaceDescription, MethodDescriptor, describe_interface, describe_method
from .params import Params, build_params
from .resolver import Resolution, resolve

__all__ = [
    "DELETE",
    "GET",
    "JSON",
    "PATCH",
    "POST",
    "PUT",
    "Arg",
    "InterfaceDescription",
    "MethodDescriptor",
    "MethodTag",
    "Params",
    "Resolution",
    "args",
    "build_params",
    "describe_interface",
    "describe_method",
    "http_tag",
    "resolve",
]
