"""
File system capability used by the extractor and the generator.

Everything that touches the disk goes through an object with four methods
(read / exists / write / mkdir), so the pipeline can run against
``LocalFileSystem`` in production and an in-memory fake in tests.
Failures surface as ``OSError``; callers decide whether to skip or abandon.
"""
from __future__ import annotations

import os


class LocalFileSystem:
    """Real disk access."""

    def read(self, path: str) -> str:
        with open(path, 'r', encoding='utf-8', errors='ignore') as f:
            return f.read()

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def write(self, path: str, text: str) -> None:
        # newline='' keeps os.linesep from being translated twice on Windows
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)

    def mkdir(self, path: str) -> None:
        # exist_ok: an already existing directory is not an error
        os.makedirs(path, exist_ok=True)
