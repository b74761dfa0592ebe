# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.phylo"
__author__ = "The Biotrove contributors"
__all__ = ["parse_newick"]

from .tree import PhyloList, PhyloNode
from ..error import NewickError


_DELIMITERS = "(),"


def parse_newick(text):
    """
    Parse a tree in *Newick* notation.

    Nodes may be unnamed and may have an optional ``:weight``, the
    weight of the edge to the parent node.
    A node may have any number of children.

    Parameters
    ----------
    text : str
        The *Newick* notation.
        It must be terminated by a semicolon, that is only followed by
        whitespace.

    Returns
    -------
    tree : PhyloList
        The parsed tree.
        The root is node ``0``, the other nodes are numbered in the
        order of their appearance.
        A lone semicolon gives an empty tree.

    Raises
    ------
    NewickError
        If the notation is malformed.

    Examples
    --------

    >>> tree = parse_newick("(mouse)dog:7.1;")
    >>> print(tree.nodes)
    [PhyloNode('dog', 7.1), PhyloNode('mouse')]
    >>> print(tree.parents, tree.path_lengths, tree.leaves)
    [-1, 0] [1, 2] [1]
    """
    text = text.strip()
    if text == "":
        raise NewickError("No data")
    if text[-1] != ";":
        raise NewickError("Newick notation is not terminated with ';'")
    tree = PhyloList()
    if len(text) == 1:
        return tree
    tree.parents.append(-1)
    tree.path_lengths.append(1)
    tree.nodes.append(PhyloNode())
    parser = _NewickParser(text[:-1], tree)
    parser.parse_subtree(0)
    if parser.token != "":
        remainder = parser.token + parser.remainder
        if len(remainder) > 30:
            remainder = remainder[:27] + "..."
        raise NewickError(f"Unparsed text follows complete tree: {remainder}")
    return tree


class _NewickParser:
    """
    Recursive descent parser, that fills a :class:`PhyloList`.

    The current token is either one of ``'('``, ``')'``, ``','``,
    a ``name:weight`` string or empty at the end of the input.
    """

    def __init__(self, text, tree):
        self.remainder = text
        self.token = ""
        self.tree = tree
        self.next_token()

    def next_token(self):
        rem = self.remainder
        if rem == "":
            self.token = ""
            return
        if rem[0] in _DELIMITERS:
            self.token = rem[0]
            self.remainder = rem[1:].strip()
            return
        end = min(
            (pos for pos in (rem.find(c) for c in _DELIMITERS) if pos >= 0),
            default=len(rem)
        )
        self.token = rem[:end].strip()
        self.remainder = rem[end:]

    def parse_subtree(self, node):
        if self.token == "(":
            self.parse_set(node)
            return
        self.tree.leaves.append(node)
        if self.token not in (")", ","):
            self.parse_name_weight(node)

    def parse_name_weight(self, node):
        data = self.tree.nodes[node]
        name, sep, weight = self.token.partition(":")
        if sep:
            try:
                data.weight = float(weight)
            except ValueError:
                raise NewickError(f"Invalid weight '{weight}'")
            data.has_weight = True
        if name != "":
            data.name = name
        self.next_token()

    def parse_set(self, node):
        self.next_token()
        tree = self.tree
        path_length = tree.path_lengths[node] + 1
        while True:
            child = len(tree.nodes)
            tree.parents.append(node)
            tree.path_lengths.append(path_length)
            tree.nodes.append(PhyloNode())
            self.parse_subtree(child)
            if self.token != ",":
                break
            self.next_token()
        if self.token != ")":
            raise NewickError("Expected ')'")
        self.next_token()
        if self.token not in (")", ",", "("):
            self.parse_name_weight(node)
