#!/usr/bin/env python3
"""
Scaffold BEM block directories from the class names used in markup.

  python bemtree_build.py --from "src/**/*.@(html%php)" --to src/blocks
  python bemtree_build.py js=src/js/blocks.js use=card,nav omit=nav__hidden

Options resolve as: defaults < package.json "bemtree" block < BEMTREE_* env
(.env supported) < flags < key=value arguments.
"""
from __future__ import annotations

import argparse
import json

from dotenv import find_dotenv, load_dotenv

from bemtree.classify_bem import tree_to_dict
from bemtree.config import parse_pairs, resolve_options
from bemtree.fs import LocalFileSystem
from bemtree.generate_structure import generate
from bemtree.pipeline import scan


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Create BEM block folders (stylesheet + optional script stub) from class names found in markup")
    p.add_argument("--cwd", help="Base directory (fallback: env BEMTREE_CWD, then current directory)")
    p.add_argument("--from", dest="from_", help="Glob for source markup; '%%' stands for '|' (default: ./src/**/*.html)")
    p.add_argument("--to", help="Output root for block directories (default: src/blocks)")
    p.add_argument("--use", help="Comma-separated class prefixes to include (default: all)")
    p.add_argument("--omit", help="Comma-separated class prefixes to exclude")
    p.add_argument("--js", help="Script import manifest; empty disables script stubs")
    p.add_argument("--prefix", help="Text written above each block rule")
    p.add_argument("--suffix", help="Text written first inside each block rule (default: '$self: &;')")
    p.add_argument("--style-ext", dest="style_ext", help="Stylesheet extension (default: scss)")
    p.add_argument("--script-ext", dest="script_ext", help="Script extension (default: js)")
    p.add_argument("--dry-run", action="store_true", help="Print the classified tree as JSON and write nothing")
    p.add_argument("overrides", nargs="*", metavar="key=value", help="Option overrides, applied last")
    return p.parse_args(argv)


def main(argv=None):
    load_dotenv(find_dotenv(usecwd=True))
    args = parse_args(argv)

    cli = {}
    for key, value in (
        ("cwd", args.cwd), ("from", args.from_), ("to", args.to), ("use", args.use),
        ("omit", args.omit), ("js", args.js), ("prefix", args.prefix), ("suffix", args.suffix),
        ("style_ext", args.style_ext), ("script_ext", args.script_ext),
    ):
        if value is not None:
            cli[key] = value
    cli.update(parse_pairs(args.overrides))
    options = resolve_options(cli)

    fs = LocalFileSystem()
    tree = scan(options, fs)
    if args.dry_run:
        print(json.dumps(tree_to_dict(tree), ensure_ascii=False, indent=2))
        return

    print(f"[BEMTREE] Blocks: {len(tree)} from {options['from']} (cwd={options['cwd']})")
    report = generate(tree, options, fs)
    print(f"[BEMTREE] Done: {report.summary()}")


if __name__ == "__main__":
    main()
