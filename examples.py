"""
Examples of using SearchTree for various use cases.
"""

from dataclasses import dataclass

from query import AnyChar, AnyString, Literal
from search_tree import SearchTree


@dataclass(frozen=True)
class Contact:
    name: str
    phone: str


def example_basic_usage():
    """Add values, look them up by exact key."""
    print("=== Basic Usage ===")

    tree = SearchTree(lambda c: c.name)
    tree.add(Contact("alice", "555-0100"))
    tree.add(Contact("bob", "555-0101"))
    tree.add(Contact("alicia", "555-0102"))

    print(f"Exact 'alice': {tree.search(Literal('alice'))}")
    print(f"Entries: {len(tree)}")
    print(f"Contact('bob', '555-0101') in tree: {Contact('bob', '555-0101') in tree}")
    print()


def example_wildcards():
    """Single and multi character wildcards."""
    print("=== Wildcards ===")

    tree = SearchTree(lambda word: word)
    for word in ["abcd", "abd", "abcdd", "abdd", "abccd", "ab", "ad"]:
        tree.add(word)

    print(f"ab ? d : {tree.search(Literal('ab'), AnyChar, Literal('d'))}")
    print(f"ab * d : {tree.search(Literal('ab') + AnyString + Literal('d'))}")
    print(f"glob '*d': {tree.search('*d')}")
    print(f"everything: {tree.search()}")
    print()


def example_remove():
    """Removal prunes nodes that no longer lead anywhere."""
    print("=== Remove ===")

    tree = SearchTree(lambda word: word)
    for word in ["abc", "abce", "abd"]:
        tree.add(word)
    print(tree)

    print(f"remove('abce') -> {tree.remove('abce')}")
    print(f"remove('xyz')  -> {tree.remove('xyz')}")
    print(tree)


def example_shared_keys():
    """Several values may share one key."""
    print("=== Shared Keys ===")

    tree = SearchTree(lambda c: c.name)
    tree.add(Contact("sam", "555-0200"))
    tree.add(Contact("sam", "555-0201"))
    tree.add(Contact("sue", "555-0202"))

    for contact in tree.search("s?m"):
        print(f"  {contact.name}: {contact.phone}")
    print()


def example_frozen_snapshot():
    """Freeze a tree into a compact read-only snapshot."""
    print("=== Frozen Snapshot ===")

    tree = SearchTree(lambda word: word)
    for word in ["apple", "app", "apricot", "banana"]:
        tree.add(word)

    frozen = tree.freeze()
    tree.remove("apple")

    print(f"{frozen!r}")
    print(f"live   'ap*': {tree.search('ap*')}")
    print(f"frozen 'ap*': {frozen.search('ap*')}")
    print()


if __name__ == "__main__":
    example_basic_usage()
    example_wildcards()
    example_remove()
    example_shared_keys()
    example_frozen_snapshot()

    print("All examples completed!")
