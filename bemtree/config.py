"""
Option resolution for bemtree.

Priority, lowest first:
  1. DEFAULTS
  2. the "bemtree" block of <cwd>/package.json
  3. BEMTREE_<OPTION> environment variables (.env is loaded by the CLI)
  4. command line flags and key=value arguments
"""
from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple


DEFAULTS: Dict[str, str] = {
    'cwd': '',
    'from': './src/**/*.html',
    'to': 'src/blocks',
    'omit': '',
    'use': '',
    # shared script manifest; empty disables script stubs
    'js': '',
    'prefix': '',
    'suffix': '$self: &;',
    'style_ext': 'scss',
    'script_ext': 'js',
}

MANIFEST_NAME = 'package.json'
MANIFEST_KEY = 'bemtree'
ENV_PREFIX = 'BEMTREE_'


def _as_text(value) -> str:
    # package.json may carry false/null/numbers; anything not a string degrades
    if value is None or isinstance(value, bool):
        return ''
    return str(value)


def parse_prefixes(value) -> Tuple[str, ...]:
    """'nav, card__x,,' -> ('nav', 'card__x')"""
    text = ''.join(_as_text(value).split())
    return tuple(p for p in text.split(',') if p)


@dataclass(frozen=True)
class FilterConfig:
    use: Tuple[str, ...] = ()
    omit: Tuple[str, ...] = ()

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> 'FilterConfig':
        return cls(use=parse_prefixes(options.get('use')), omit=parse_prefixes(options.get('omit')))

    def allows(self, token: str) -> bool:
        if self.use and not token.startswith(self.use):
            return False
        if self.omit and token.startswith(self.omit):
            return False
        return True


def parse_pairs(pairs: Iterable[str]) -> Dict[str, str]:
    """Parse key=value command line arguments. Items without '=' are ignored."""
    out: Dict[str, str] = {}
    for item in pairs:
        if '=' not in item:
            print(f"[WARN] Ignoring argument without '=': {item}", file=sys.stderr)
            continue
        k, v = item.split('=', 1)
        k = k.strip().replace('-', '_')
        if k:
            out[k] = v
    return out


def load_manifest_options(cwd: str) -> Dict[str, str]:
    path = os.path.join(cwd, MANIFEST_NAME)
    if not os.path.exists(path):
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        print(f"[WARN] Cannot load {path}: {e}", file=sys.stderr)
        return {}
    block = data.get(MANIFEST_KEY) if isinstance(data, dict) else None
    if not isinstance(block, dict):
        return {}
    return {k: _as_text(v) for k, v in block.items()}


def load_env_options(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    environ = os.environ if environ is None else environ
    out: Dict[str, str] = {}
    for key in DEFAULTS:
        value = environ.get(ENV_PREFIX + key.upper())
        if value is not None:
            out[key] = value
    return out


def resolve_options(cli: Optional[Mapping[str, str]] = None,
                    environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Merge every option layer. cwd is resolved first since it locates package.json."""
    cli = dict(cli or {})
    env = load_env_options(environ)
    cwd = cli.get('cwd') or env.get('cwd') or os.getcwd()

    options = dict(DEFAULTS)
    options.update(load_manifest_options(cwd))
    options.update(env)
    options.update(cli)
    options['cwd'] = options.get('cwd') or cwd
    return options


def merge_options(overrides: Optional[Mapping[str, object]] = None) -> Dict[str, str]:
    """Defaults < package.json "bemtree" block < overrides, for programmatic use.

    No environment or command line layer; package.json is read from the
    overrides' cwd, or the process cwd.
    """
    overrides = dict(overrides or {})
    cwd = _as_text(overrides.get('cwd')) or os.getcwd()
    options = dict(DEFAULTS)
    options.update(load_manifest_options(cwd))
    for k, v in overrides.items():
        options[k] = _as_text(v)
    options['cwd'] = options.get('cwd') or cwd
    return options
