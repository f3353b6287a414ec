"""Extractor -> classifier -> generator, in that order."""
from __future__ import annotations

from typing import Mapping, Optional

from bemtree.classify_bem import BemTree, classify
from bemtree.config import FilterConfig, merge_options
from bemtree.extract_classes import extract, find_source_files
from bemtree.fs import LocalFileSystem
from bemtree.generate_structure import GenerateReport, generate


def scan(options: Mapping[str, str], fs=None) -> BemTree:
    fs = fs or LocalFileSystem()
    files = find_source_files(options['from'], options['cwd'])
    classes, attrs = extract(files, options['cwd'], fs)
    return classify(classes, attrs, FilterConfig.from_options(options))


def run(options: Optional[Mapping[str, object]] = None, fs=None) -> GenerateReport:
    """Programmatic entry: defaults < package.json "bemtree" block < options (no env/CLI)."""
    opts = merge_options(options)
    fs = fs or LocalFileSystem()
    return generate(scan(opts, fs), opts, fs)
