"""
Compressed Prefix Trie (Radix) keyed by token literals.

This module implements the compressed trie that backs the tokenizer. Each
node stores a **key** (the substring it represents relative to its parent)
and a **values** list (the categories registered for the full path string
ending at that node). Chains of single-child nodes never exist: a node's key
is a whole substring, not one character.

Key features
------------
- **Path splitting on insert**
  - Inserting a key that diverges from an existing child mid-key creates a
    branch node for the longest common prefix, re-keys the old child to its
    remaining suffix, and hangs both below the branch.
- **Lazy children**
  - Nodes use `__slots__`; `children` stays `None` until the first child is
    attached, then becomes a dict `first_char -> TrieNode`.
- **Lookups used by the scanner**
  - `find_exact(s)` walks whole keys and returns the node whose path string is
    exactly `s`.
  - `find_partial(ch, node)` is a single-character child probe, used as a
    one-character lookahead.
  - `is_terminal(node)` tells whether any longer registered string extends the
    node's path string.
- **Iterative traversals**
  - Insert, lookup and enumeration are loops, not recursion.

Classes
-------
TrieNode
    Node type. Holds `key`, `values` and `children`.
    Helper methods:
      - `_get(ch)` → child whose key starts with `ch`, or None
      - `_set(child)` → attach/replace a child by its key's first character
      - `_iter_children()` → iterate children
      - `_degree()` → number of children

PrefixTrie
    Public API for building and querying the trie.

Conventions & invariants
------------------------
- **Edge invariant:** At any node, no two children share the same first
  character; the dict key is exactly that character.
- **Path invariant:** Concatenating `key` from the root down to a node
  reconstructs the string registered under that node.
- **Root:** The root has an empty key and never carries values; the empty
  string cannot be registered.
- **No removal:** Nodes are only ever created or re-keyed, never deleted.
"""

import logging


logger = logging.getLogger(__name__)


class TrieNode:
  __slots__ = ("key", "values", "children")

  def __init__(self, key="", values=None):
    self.key = key
    self.values = list(values) if values else []
    self.children = None

  def __repr__(self):
    return f"TrieNode({self.key!r}, {self.values!r}, degree={self._degree()})"


  def _get(self, ch):
    """Return the child whose key starts with ch, or None."""
    c = self.children
    if c is None:
      return None
    return c.get(ch)


  def _set(self, child):
    """Insert/replace child by the first char of its key."""
    if self.children is None:
      self.children = {}
    self.children[child.key[0]] = child


  def _iter_children(self):
    c = self.children
    if not c:
      return
    yield from c.values()


  def _degree(self):
    c = self.children
    return 0 if not c else len(c)






#### ===================================================  ####
#    Compressed Prefix Trie mapping literals to value lists
#### ===================================================  ####

class PrefixTrie:
  __slots__ = ("root", )

  def __init__(self):
    self.root = TrieNode()


  @staticmethod
  def _lcp(a, b):
    """Helper to Return the length of the Longest Common Prefix between a and b."""
    i = 0
    n = min(len(a), len(b))
    while i < n and a[i] == b[i]:
      i += 1
    return i


  @staticmethod
  def _split(child, key, same, values):
    """Build the branch that replaces `child` when `key` diverges from it.

    `same` is the length of the common prefix of `key` and `child.key`
    (at least 1, shorter than `child.key`). The old child is re-keyed to its
    remaining suffix and attached below the branch. If `key` ends at the
    split, the branch itself carries `values`; otherwise a new leaf for the
    rest of `key` becomes the branch's second child.

    Returns the branch node (the new root of this subtree).
    """
    common = key[:same]
    rest = key[same:]

    if rest:
      branch = TrieNode(common)
      branch._set(TrieNode(rest, values))
    else:
      branch = TrieNode(common, values)

    child.key = child.key[same:]
    branch._set(child)
    return branch


  def insert(self, key, values):
    """Associate `values` with `key`, splitting nodes as needed.

    - Selects the child slot by the first character of the remaining key; if
      the slot is empty, attaches a new leaf holding the whole remainder.
    - If the child's key is fully matched, descends with the suffix, or
      overwrites the child's values when the key is used up exactly.
    - On a partial match, replaces the slot with the branch built by `_split`.

    Args:
        key (str): Non-empty literal to register.
        values (list): Values stored for `key` (copied).

    Raises:
        ValueError: If `key` is empty or not a string.
    """
    if not isinstance(key, str) or not key:
      raise ValueError(f"trie key must be a non-empty string, got {key!r}")

    node = self.root
    while True:
      child = node._get(key[0])
      if child is None:
        node._set(TrieNode(key, values))
        return

      i = self._lcp(key, child.key)
      if i == len(child.key):
        if i == len(key):
          child.values = list(values) if values else []
          return
        key = key[i:]
        node = child
        continue

      node._set(self._split(child, key, i, values))
      return


  def batch_insert(self, pairs):
    """Insert `(key, values)` pairs in order; the last insert of a key wins.

    Returns:
        int: Number of pairs inserted.
    """
    count = 0
    for key, values in pairs:
      self.insert(key, values)
      count += 1
    logger.debug("batch_insert: %d pairs, %d keys registered", count, len(self))
    return count


  def find_exact(self, s):
    """Return the node whose full path string equals `s`, else None.

    The node may be a pure branching node with empty `values`; callers that
    need a registered token must check `node.values`.
    """
    if not s:
      return None

    node = self.root
    while s:
      child = node._get(s[0])
      if child is None:
        return None
      k = child.key
      if not s.startswith(k):
        return None
      s = s[len(k):]
      node = child
    return node


  def find_partial(self, ch, node=None):
    """Single-character child probe below `node` (default: the root)."""
    if node is None:
      node = self.root
    return node._get(ch)


  @staticmethod
  def is_terminal(node):
    """True iff no longer registered string extends this node's path string."""
    return node._degree() == 0


  def prefix_search(self, prefix):
    """Locate the node for a given prefix.

    - Traverses children by first character, consuming whole keys when matched.
    - If the prefix ends *mid-key*, returns that child plus the unconsumed
      remainder of its key (`pending`).
    - Empty prefix returns `(root, "")`; missing path returns `(None, "")`.

    Returns:
        tuple[TrieNode | None, str]
    """
    if not prefix:
      return self.root, ""

    node = self.root
    lcp = self._lcp
    while prefix:
      child = node._get(prefix[0])
      if child is None:
        return None, ""
      k = child.key
      i = lcp(prefix, k)

      if i == len(k):
        prefix = prefix[i:]
        node = child
        continue

      if i == len(prefix):
        return child, k[i:]
      return None, ""
    return node, ""


  def enumerate_prefix(self, prefix="", k=None):
    """Enumerate registered keys that start with `prefix` using an iterative DFS.

    - Uses `prefix_search` to find the start node; a mid-key prefix seeds the
      buffer with the pending remainder of that key.
    - Traverses with a stack of `(child_iterator, depth)` over a shared,
      mutable character buffer.
    - Output order follows child insertion order, not lexicographic order.

    Args:
        prefix (str): Prefix to enumerate from ("" enumerates the whole trie).
        k (int | None): Optional limit on number of results.

    Yields:
        tuple[str, list]: `(key, values)` for each registered key.
    """
    node, pending = self.prefix_search(prefix)
    if node is None:
      return
    if k is not None and k <= 0:
      return

    buf = list(prefix)
    buf.extend(pending)
    yielded = 0
    if node.values:
      yield "".join(buf), list(node.values)
      yielded += 1
      if k is not None and yielded >= k:
        return

    to_str = "".join
    stack = [(node._iter_children(), len(buf))]
    while stack:
      children, depth = stack[-1]
      try:
        child = next(children)
      except StopIteration:
        stack.pop()
        continue
      buf[depth:] = []
      buf.extend(child.key)
      if child.values:
        yield to_str(buf), list(child.values)
        yielded += 1
        if k is not None and yielded >= k:
          return
      stack.append((child._iter_children(), len(buf)))


  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If True, return `sum(degree) / (# internal nodes)` instead.

    Returns
    -------
    int | float
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1

      deg = node._degree()
      if deg > 0:
        total_deg += deg
        internal += 1
        stack.extend(node._iter_children())
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes


  def __contains__(self, key):
    node = self.find_exact(key)
    return node is not None and bool(node.values)


  def __len__(self):
    return sum(1 for _ in self.enumerate_prefix(""))
