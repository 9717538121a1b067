"""Binding index: loading, searching and resolving external symbols."""

from .index import BindingIndex
from .loader import load_bindings, load_workspace, write_workspace
from .trie import SuffixTrie, build_suffix_trie

__all__ = [
    "BindingIndex",
    "load_bindings",
    "load_workspace",
    "write_workspace",
    "SuffixTrie",
    "build_suffix_trie",
]
