"""
Write the block skeleton for a classified BEM tree.

  <to>/<block>/<block>.<style_ext>   always (nested rules for mods and elements)
  <to>/<block>/<block>.<script_ext>  when the block has a script marker and a
                                     manifest is configured

Existing files are never touched: the existence check is the only write guard.
Script stubs get one import line each in the shared manifest, which is
updated once at the end of the run.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import List, Mapping

from bemtree.classify_bem import BemNode, BemTree


@dataclass
class GenerateReport:
    created_dirs: List[str] = field(default_factory=list)
    created_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    def summary(self) -> str:
        return (f"dirs={len(self.created_dirs)} files={len(self.created_files)} skipped={len(self.skipped_files)} "
                f"imports={len(self.imports)} failures={len(self.failures)}")


def render_stylesheet(name: str, node: BemNode, prefix: str = '', suffix: str = '') -> str:
    lines: List[str] = []
    if prefix:
        lines.append(f"{prefix}\n\n")
    lines.append(f".{name} {{\n")
    if suffix:
        lines.append(f"\t{suffix}\n\n")
    for mod in node.mods:
        lines.append(f"\t&_{mod} {{\n\t\t\n\t}}\n\n")
    for elem, elem_node in node.elems.items():
        lines.append(f"\t&__{elem} {{\n")
        if elem_node.mods:
            for mod in elem_node.mods:
                lines.append(f"\n\t\t&_{mod} {{\n\t\t\t\n\t\t}}\n")
        else:
            lines.append("\n")
        lines.append("\t}\n\n")
    lines.append("}\n")
    return ''.join(lines)


def import_line(script_path: str, manifest_path: str) -> str:
    """import statement for script_path as seen from the manifest's directory"""
    base = os.path.dirname(manifest_path) or '.'
    rel = os.path.relpath(script_path, base).replace(os.sep, '/')
    if not rel.startswith('.'):
        rel = './' + rel
    return f"import '{rel}';"


def _fail(report: GenerateReport, message: str) -> None:
    report.failures.append(message)
    print(f"[ERROR] {message}", file=sys.stderr)


def _write(fs, path: str, text: str, report: GenerateReport) -> bool:
    try:
        fs.write(path, text)
    except OSError as e:
        _fail(report, f"File NOT created: {path}: {e}")
        return False
    report.created_files.append(path)
    print(f"[BEMTREE] File created: {path}")
    return True


def update_manifest(path: str, lines: List[str], fs, report: GenerateReport) -> List[str]:
    """Append the lines the manifest does not contain yet; return what was added."""
    existing = ''
    if fs.exists(path):
        try:
            existing = fs.read(path)
        except OSError as e:
            # never rewrite a manifest we could not read
            _fail(report, f"Cannot read manifest {path}: {e}")
            return []
    else:
        parent = os.path.dirname(path)
        if parent:
            try:
                fs.mkdir(parent)
            except OSError as e:
                _fail(report, f"Directory NOT created: {parent}: {e}")
                return []

    added = [line for line in dict.fromkeys(lines) if line not in existing]
    if not added:
        return []
    text = existing
    if text and not text.endswith(('\n', '\r')):
        text += os.linesep
    text += os.linesep.join(added) + os.linesep
    try:
        fs.write(path, text)
    except OSError as e:
        _fail(report, f"Manifest NOT updated: {path}: {e}")
        return []
    report.imports.extend(added)
    print(f"[BEMTREE] Manifest updated: {path} (+{len(added)})")
    return added


def generate(tree: BemTree, options: Mapping[str, str], fs) -> GenerateReport:
    report = GenerateReport()
    cwd = options.get('cwd') or '.'
    root = os.path.join(cwd, options.get('to') or '')
    style_ext = options.get('style_ext') or 'scss'
    script_ext = options.get('script_ext') or 'js'
    manifest = os.path.join(cwd, options['js']) if options.get('js') else ''
    queued: List[str] = []

    for name, node in tree.items():
        block_dir = os.path.join(root, name)
        style_path = os.path.join(block_dir, f"{name}.{style_ext}")

        if fs.exists(style_path):
            report.skipped_files.append(style_path)
        else:
            is_new = not fs.exists(block_dir)
            try:
                fs.mkdir(block_dir)
            except OSError as e:
                _fail(report, f"Directory NOT created: {block_dir}: {e}")
                continue
            if is_new:
                report.created_dirs.append(block_dir)
            content = render_stylesheet(name, node, options.get('prefix') or '', options.get('suffix') or '')
            _write(fs, style_path, content, report)

        if not (node.has_script and manifest):
            continue
        script_path = os.path.join(block_dir, f"{name}.{script_ext}")
        if fs.exists(script_path):
            report.skipped_files.append(script_path)
            continue
        if _write(fs, script_path, '', report):
            queued.append(import_line(script_path, manifest))

    if manifest and queued:
        update_manifest(manifest, queued, fs, report)
    return report
