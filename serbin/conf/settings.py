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

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from pydantic import NonNegativeInt, PositiveInt

from serbin.utils import pydantic
from serbin.utils.yaml import model_from_extended_yaml


class SerbinSettings(pydantic.BaseModel):
    # Whether containers of trivially copyable items (fixed-width numbers, bools, opted-in dataclasses) read and write
    # them as a single block. The bytes are the same either way.
    BULK_COPY: bool = True

    # Maximum number of bytes a Writer may produce, None means no limit.
    MAX_WRITE_BYTES: Optional[NonNegativeInt] = None

    # Maximum number of bytes a Reader may consume, None means no limit. This bounds the damage a corrupted length
    # prefix can do.
    MAX_READ_BYTES: Optional[NonNegativeInt] = None

    # Buffer size used when opening files, also the largest chunk a file reader asks for at once.
    STREAM_BUFFER_SIZE: PositiveInt = 65536

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> SerbinSettings:
        """Takes a filepath to a yaml file and returns a validated SerbinSettings instance."""
        return model_from_extended_yaml(cls, filepath=filepath)
