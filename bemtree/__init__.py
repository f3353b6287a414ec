from bemtree.classify_bem import BemNode, ElemNode, classify
from bemtree.config import FilterConfig
from bemtree.pipeline import run, scan

__all__ = ['BemNode', 'ElemNode', 'FilterConfig', 'classify', 'run', 'scan']
