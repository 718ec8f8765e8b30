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

from serbin.exception import SerbinError


class SerializationError(SerbinError):
    """Base class for faults raised while writing to a byte sink or reading from a byte source."""
    pass


class OutOfDataError(SerializationError):
    """The byte source could not supply the requested number of bytes (end of stream or short read)."""
    pass


class WriteError(SerializationError):
    """The byte sink could not accept all the bytes of a write."""
    pass


class TrailingDataError(SerializationError):
    """A deserializer was finalized before all of its bytes were consumed."""
    pass


class BadDataError(SerializationError, ValueError):
    """The bytes read cannot represent a value of the requested shape.

    Only raised where a byte pattern is checked: presence flags, enum members and character data.
    """
    pass


class ConstructionError(SerializationError):
    """A value could not be constructed while decoding, for example a record whose class cannot be default-constructed.
    """
    pass
