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

import ctypes
import struct
import sys

# Fixed-width scalars use the host byte order with standard sizes and no alignment padding.
NATIVE_BYTE_ORDER = '='

# XXX: the length prefix is the host's `size_t`, both its width and its byte order depend on the platform that wrote
#      the stream. This is not recorded anywhere in the stream, streams are only portable between hosts that agree on
#      both.
LENGTH_PREFIX_FORMAT = '@N'
LENGTH_PREFIX_SIZE = struct.calcsize(LENGTH_PREFIX_FORMAT)

PRESENCE_FLAG_SIZE = 1

# width of the host `wchar_t`, used by wide strings
WCHAR_SIZE = ctypes.sizeof(ctypes.c_wchar)
WCHAR_CODEC = f'utf-{WCHAR_SIZE * 8}-{"le" if sys.byteorder == "little" else "be"}'
