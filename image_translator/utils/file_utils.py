"""
/**
 * @file image_translator/utils/file_utils.py
 * @description 文件处理工具：扩展名提取、时间戳文件名生成、Base64 编码。
 */
"""

from __future__ import annotations

import base64
import os
import threading
import time
from typing import Callable, Optional


def original_extension(filename: Optional[str]) -> str:
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    _, ext = os.path.splitext(name)
    return ext


def file_to_base64(file_path: str) -> str:
    with open(file_path, "rb") as f:
        return base64.b64encode(f.read()).decode("ascii")


class TimestampNamer:
    """
    Generates upload filenames of the form ``<millis><ext>``.

    Tokens are strictly increasing within one namer, so files handled in the
    same millisecond still get distinct names.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_token(self) -> int:
        with self._lock:
            now = int(self._clock() * 1000)
            token = now if now > self._last else self._last + 1
            self._last = token
            return token

    def filename_for(self, original_name: Optional[str]) -> str:
        return f"{self.next_token()}{original_extension(original_name)}"
