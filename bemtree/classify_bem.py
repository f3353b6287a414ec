"""
Rebuild the BEM tree from an ordered list of class tokens.

The input must already be ordered so that a block name precedes its own
modifiers and elements (see extract_classes.order_classes). The pass keeps a
single "current block" cursor; a derivative that does not belong to the
current block is dropped instead of being attached elsewhere.

  card            -> block
  card_wide       -> modifier of card
  card__title     -> element of card
  card__title_big -> modifier of card__title
  card-js         -> script marker of card (also data-card-js)
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional

from bemtree.config import FilterConfig


SCRIPT_SUFFIX = '-js'


class TokenKind(str, Enum):
    BLOCK = 'block'
    SCRIPT = 'script'
    MODIFIER = 'modifier'
    ELEMENT = 'element'
    ELEMENT_MOD = 'element_mod'
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    elem: str = ''
    mod: str = ''


@dataclass
class ElemNode:
    mods: List[str] = field(default_factory=list)


@dataclass
class BemNode:
    mods: List[str] = field(default_factory=list)
    elems: Dict[str, ElemNode] = field(default_factory=dict)
    has_script: bool = False


BemTree = Dict[str, BemNode]


@dataclass
class ClassifyState:
    cursor: str = ''
    tree: BemTree = field(default_factory=dict)


def classify_token(token: str, cursor: str) -> Token:
    """Tag a raw token relative to the block currently being filled."""
    if '_' not in token:
        if not token.endswith(SCRIPT_SUFFIX):
            return Token(TokenKind.BLOCK, token)
        if cursor and token == cursor + SCRIPT_SUFFIX:
            return Token(TokenKind.SCRIPT, token)
        return Token(TokenKind.UNKNOWN, token)
    if not cursor:
        return Token(TokenKind.UNKNOWN, token)

    if token.count('_') == 1:
        head = cursor + '_'
        if token.startswith(head) and len(token) > len(head):
            return Token(TokenKind.MODIFIER, token, mod=token[len(head):])
        return Token(TokenKind.UNKNOWN, token)

    head = cursor + '__'
    if token.startswith(head):
        parts = token[len(head):].split('_')
        if len(parts) == 1 and parts[0]:
            return Token(TokenKind.ELEMENT, token, elem=parts[0])
        if len(parts) == 2 and all(parts):
            return Token(TokenKind.ELEMENT_MOD, token, elem=parts[0], mod=parts[1])
    return Token(TokenKind.UNKNOWN, token)


def _with_node(state: ClassifyState, cursor: str, node: BemNode) -> ClassifyState:
    # copy on write: the incoming state is left as it was
    tree = dict(state.tree)
    tree[cursor] = node
    return ClassifyState(cursor=cursor, tree=tree)


def _appended(items: List[str], value: str) -> List[str]:
    return items if value in items else items + [value]


def step(state: ClassifyState, raw: str, attrs: frozenset = frozenset()) -> ClassifyState:
    """Fold one token into the state and return a new state for the next token.

    The given state, its tree and its nodes are never modified.
    """
    token = classify_token(raw, state.cursor)

    if token.kind is TokenKind.BLOCK:
        # redeclaration resets the node: last write to the tree wins
        state = _with_node(state, token.value, BemNode())
    elif token.kind is TokenKind.MODIFIER:
        node = state.tree[state.cursor]
        state = _with_node(state, state.cursor, replace(node, mods=_appended(node.mods, token.mod)))
    elif token.kind in (TokenKind.ELEMENT, TokenKind.ELEMENT_MOD):
        node = state.tree[state.cursor]
        elem = node.elems.get(token.elem, ElemNode())
        if token.kind is TokenKind.ELEMENT_MOD:
            elem = ElemNode(mods=_appended(elem.mods, token.mod))
        elems = dict(node.elems)
        elems[token.elem] = elem
        state = _with_node(state, state.cursor, replace(node, elems=elems))

    # the marker may sit anywhere among the block's tokens, so check on every step
    if state.cursor:
        node = state.tree[state.cursor]
        marker = state.cursor + SCRIPT_SUFFIX
        if not node.has_script and (token.kind is TokenKind.SCRIPT or marker in attrs):
            state = _with_node(state, state.cursor, replace(node, has_script=True))
    return state


def classify(classes: Iterable[str], attrs: Iterable[str] = (),
             filters: Optional[FilterConfig] = None) -> BemTree:
    filters = filters or FilterConfig()
    attr_set = frozenset(attrs)
    state = ClassifyState()
    for raw in classes:
        if not filters.allows(raw):
            continue
        state = step(state, raw, attr_set)
    return state.tree


def tree_to_dict(tree: BemTree) -> Dict[str, dict]:
    return {name: asdict(node) for name, node in tree.items()}
