# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
This module holds the simple encoding implementations.

Simple in this context means "not compound". For example a native number encoding is parametrized by a struct format
code, but not by a generic function or type. Encoders that delegate part of their work to another encoder (optionals,
collections, maps, ...) live in the `compound_encoding` module.

Every submodule `x` deals with a single kind of value and looks like this:

    def encode_x(serializer: Serializer, value: ValueType, ...config params...) -> None:
        ...

    def decode_x(deserializer: Deserializer, ...config params...) -> ValueType:
        ...

All encodings here use the host's native layout: native byte order, native sizes, no padding. The produced bytes are
only meant to be read back on a host with the same architecture.
"""
