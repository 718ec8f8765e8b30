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

from typing import IO

from typing_extensions import override

from .exceptions import WriteError
from .serializer import Serializer
from .types import Buffer


class StreamSerializer(Serializer):
    """Implementation of Serializer that appends to a binary file-like object.

    Nothing is buffered here, buffering is left to the stream. When `owns_stream=True` the stream is closed by
    `close()`, otherwise it is only flushed.
    """

    def __init__(self, stream: IO[bytes], *, owns_stream: bool = False) -> None:
        self._stream = stream
        self._owns_stream = owns_stream
        self._pos: int = 0

    @override
    def close(self) -> None:
        if self._stream.closed:
            return
        try:
            self._stream.flush()
        except OSError as e:
            raise WriteError('could not flush stream') from e
        finally:
            if self._owns_stream:
                self._stream.close()

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        # int.to_bytes checks for correct range
        self.write_bytes(int.to_bytes(data, length=1, byteorder='big'))

    @override
    def write_bytes(self, data: Buffer) -> None:
        view = memoryview(data)
        try:
            written = self._stream.write(view)
        except (OSError, ValueError) as e:
            # XXX: ValueError is what a closed file raises
            raise WriteError(f'could not write {len(view)} bytes') from e
        # XXX: raw streams can return None (would block) or write less than requested, both are faults
        if written != len(view):
            raise WriteError(f'short write: {written} of {len(view)} bytes')
        self._pos += len(view)
