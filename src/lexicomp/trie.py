"""Prefix tree over a dictionary of words.

Lookup cost is proportional to the prefix length plus the size of the
result, independent of how many words are stored, so the dynamic
dictionary can be rebuilt and queried on every keystroke.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class _Node:
    """One character of a stored word; children keyed by their character."""

    __slots__ = ("char", "terminal", "children")

    def __init__(self, char: str = "") -> None:
        self.char = char
        self.terminal = False
        self.children: dict[str, _Node] = {}


class Trie:
    """Word dictionary with prefix-bounded retrieval in ascending order."""

    def __init__(self) -> None:
        self._root = _Node()
        self._size = 0

    @classmethod
    def from_words(cls, words: Iterable[str]) -> Trie:
        trie = cls()
        for word in words:
            trie.push(word)
        return trie

    def push(self, word: str) -> None:
        """Insert word, creating missing nodes. Re-inserting is a no-op."""
        if not word:
            # The root stands for no character and never ends a word
            return
        node = self._root
        for ch in word:
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = _Node(ch)
            node = child
        if not node.terminal:
            node.terminal = True
            self._size += 1

    def clear(self) -> None:
        """Drop every stored word."""
        self._root.children.clear()
        self._size = 0

    def find_completions(self, prefix: str) -> list[str]:
        """Return stored words starting with prefix, ascending.

        An empty prefix yields no completions; use words() for the full set.
        """
        if not prefix:
            return []
        node = self._find(prefix)
        if node is None:
            return []
        return list(_walk(node, prefix))

    def words(self) -> list[str]:
        """Return every stored word, ascending."""
        return list(_walk(self._root, ""))

    def _find(self, prefix: str) -> _Node | None:
        node = self._root
        for ch in prefix:
            child = node.children.get(ch)
            if child is None:
                return None
            node = child
        return node

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        node = self._find(word)
        return node is not None and node.terminal

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        return _walk(self._root, "")

    def __repr__(self) -> str:
        return f"Trie({self._size} words)"


def _walk(node: _Node, prefix: str) -> Iterator[str]:
    """Pre-order walk with children in ascending character order.

    A word is visited before any of its extensions, which is exactly
    ascending lexicographic order.
    """
    stack = [(node, prefix)]
    while stack:
        current, text = stack.pop()
        if current.terminal:
            yield text
        # Push in reverse so the smallest child is popped first
        for ch in sorted(current.children, reverse=True):
            child = current.children[ch]
            stack.append((child, text + child.char))
