"""Reverse trie for suffix search over dotted symbol names."""

from collections import defaultdict


class TrieNode:
    """Node in a trie data structure."""

    __slots__ = ("children", "keys")

    def __init__(self):
        self.children: dict[str, "TrieNode"] = {}
        self.keys: list[str] = []


class SuffixTrie:
    """Trie over reversed, lowercased FQNs.

    Finds every symbol whose FQN ends with a given dotted suffix, e.g.
    ``Baz.Qux`` matches ``Foo.Baz.Qux``.
    """

    def __init__(self):
        self.root = TrieNode()

    def add(self, fqn: str, key: str):
        """Add a symbol to the trie.

        Args:
            fqn: Dotted fully qualified name (e.g., "Contoso.Collections.Bag")
            key: Entry key to associate with this symbol
        """
        node = self.root
        for char in fqn.lower()[::-1]:
            if char not in node.children:
                node.children[char] = TrieNode()
            node = node.children[char]
        if key not in node.keys:
            node.keys.append(key)

    def search_suffix(self, suffix: str, limit: int = 100) -> list[str]:
        """Find keys of symbols whose FQN ends with ``suffix``.

        Only whole name segments match: ``Qux`` matches ``Foo.Qux`` but not
        ``Foo.BarQux``.

        Args:
            suffix: Dotted suffix to search for
            limit: Maximum number of results

        Returns:
            List of matching entry keys
        """
        node = self.root
        for char in suffix.lower()[::-1]:
            if char not in node.children:
                return []
            node = node.children[char]

        results: list[str] = []
        # Exact match on the whole FQN
        for key in node.keys:
            if len(results) >= limit:
                return results
            results.append(key)
        # Longer FQNs must continue with a segment separator
        boundary = node.children.get(".")
        if boundary is not None:
            self._collect_keys(boundary, results, limit)
        return results

    def _collect_keys(self, node: TrieNode, results: list[str], limit: int):
        """Recursively collect all keys under a trie node."""
        if len(results) >= limit:
            return

        for key in node.keys:
            if len(results) >= limit:
                return
            if key not in results:
                results.append(key)

        for child in node.children.values():
            if len(results) >= limit:
                return
            self._collect_keys(child, results, limit)


def build_suffix_trie(fqns: dict[str, str]) -> SuffixTrie:
    """Build a suffix trie from a mapping of entry key to FQN."""
    trie = SuffixTrie()
    for key, fqn in fqns.items():
        trie.add(fqn, key)
    return trie


def group_by_short_name(fqns: dict[str, str]) -> dict[str, list[str]]:
    """Map both exact and lowercased short names to entry keys."""
    by_name: dict[str, list[str]] = defaultdict(list)
    for key, fqn in fqns.items():
        short = fqn.rsplit(".", 1)[-1]
        by_name[short].append(key)
        if short.lower() != short:
            by_name[short.lower()].append(key)
    return dict(by_name)
