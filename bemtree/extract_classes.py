"""
Collect class tokens and data- attribute names from markup files.

Only attribute values are pulled out with regexes; the markup is never parsed.
The class list is returned in classifier order: grouped by block prefix with
the bare block name ahead of its modifiers and elements.
"""
from __future__ import annotations

import glob
import os
import re
import sys
from typing import Iterable, List, Tuple


CLASS_ATTR_RE = re.compile(r'class=(?:"([^"]*)"|\'([^\']*)\')', re.I)
DATA_ATTR_RE = re.compile(r'\bdata-([\w-]+)')
# (a|b), @(a|b), +(a|b) or {a,b}
GROUP_RE = re.compile(r'[@+]?\(([^()]*)\)|\{([^{}]*)\}')


def unique(items: Iterable[str]) -> List[str]:
    # keep first occurrence
    return list(dict.fromkeys(items))


def collect_classes_from_html(html_text: str) -> List[str]:
    found: List[str] = []
    for m in CLASS_ATTR_RE.finditer(html_text):
        value = m.group(1) if m.group(1) is not None else m.group(2)
        found.extend(c for c in value.split() if c)
    return found


def collect_data_attrs(html_text: str) -> List[str]:
    """Return data- attribute names without the prefix (data-menu-js -> menu-js)."""
    return DATA_ATTR_RE.findall(html_text)


def block_prefix(token: str) -> str:
    return token.split('_', 1)[0]


def order_classes(tokens: Iterable[str]) -> List[str]:
    # two stable passes: group by prefix, then pull a bare block name ahead of its derivatives
    out = sorted(tokens, key=block_prefix)
    out.sort(key=lambda t: (block_prefix(t), t != block_prefix(t)))
    return out


def expand_pattern(pattern: str) -> List[str]:
    """Split a source pattern into plain glob patterns.

    '%' stands for '|' so several alternatives fit into one option value:
    'src/*.@(html%php)' -> ['src/*.html', 'src/*.php'].
    """
    pattern = pattern.replace('%', '|')
    m = GROUP_RE.search(pattern)
    if m:
        if m.group(1) is not None:
            alts = m.group(1).split('|')
        else:
            alts = m.group(2).split(',')
        out: List[str] = []
        for alt in alts:
            out.extend(expand_pattern(pattern[:m.start()] + alt + pattern[m.end():]))
        return unique(out)
    return unique(p for p in pattern.split('|') if p)


def find_source_files(pattern: str, cwd: str) -> List[str]:
    """Return files under cwd matching pattern, relative to cwd and sorted."""
    found: List[str] = []
    for pat in expand_pattern(pattern):
        if pat.startswith('./'):
            pat = pat[2:]
        for rel in glob.glob(pat, root_dir=cwd, recursive=True):
            if os.path.isfile(os.path.join(cwd, rel)):
                found.append(rel)
    return sorted(unique(found))


def extract(files: Iterable[str], cwd: str, fs) -> Tuple[List[str], List[str]]:
    """Read every file and return (ordered class tokens, data attribute names).

    An unreadable file is reported and skipped.
    """
    classes: List[str] = []
    attrs: List[str] = []
    for name in files:
        path = os.path.join(cwd, name)
        try:
            text = fs.read(path)
        except OSError as e:
            print(f"[ERROR] Cannot read {path}: {e}", file=sys.stderr)
            continue
        classes.extend(collect_classes_from_html(text))
        attrs.extend(collect_data_attrs(text))
    return order_classes(unique(classes)), unique(attrs)
