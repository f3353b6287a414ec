"""Shared fixtures: an in-memory file system standing in for LocalFileSystem."""

import os

import pytest


class MemoryFileSystem:
    """Dict-backed fake with the same read/exists/write/mkdir surface."""

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.dirs = set()
        self.fail_read = set()
        self.fail_write = set()
        self.fail_mkdir = set()
        self.writes = []

    def read(self, path):
        path = os.path.normpath(path)
        if path in self.fail_read:
            raise PermissionError(f"denied: {path}")
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def exists(self, path):
        path = os.path.normpath(path)
        return path in self.files or path in self.dirs

    def write(self, path, text):
        path = os.path.normpath(path)
        if path in self.fail_write:
            raise PermissionError(f"denied: {path}")
        self.files[path] = text
        self.writes.append(path)

    def mkdir(self, path):
        path = os.path.normpath(path)
        if path in self.fail_mkdir:
            raise PermissionError(f"denied: {path}")
        self.dirs.add(path)

    def get(self, *parts):
        return self.files.get(os.path.normpath(os.path.join(*parts)))


@pytest.fixture
def memfs():
    return MemoryFileSystem()


@pytest.fixture
def options():
    return {
        "cwd": "proj",
        "from": "./src/**/*.html",
        "to": "src/blocks",
        "omit": "",
        "use": "",
        "js": "",
        "prefix": "",
        "suffix": "$self: &;",
        "style_ext": "scss",
        "script_ext": "js",
    }
