import logging
from typing import Any, Iterable, Iterator, Optional

log = logging.getLogger(__name__)


class EmptyQueueError(IndexError):
    """delete_max() called on an empty forest."""


class BinNode():
    __slots__ = ('value', 'degree', 'child', 'sibling')

    def __init__(self, value=None, degree=0, child=None, sibling=None):
        self.value, self.degree, self.child, self.sibling = (value, degree,
                                                             child, sibling)

    def children(self):
        child = self.child
        while child is not None:
            yield child
            child = child.sibling

    def __repr__(self):
        return f'{self.value!r}({self.degree})'


def link(a: BinNode, b: BinNode) -> BinNode:
    """
    Link two binomial trees of the same degree

    The root with the smaller value becomes the first child of the other.
    On equal values `a` stays on top.

    Args:
        a: root of a binomial tree of degree k
        b: root of a binomial tree of degree k

    Returns:
        root of the combined tree of degree k + 1
    """
    if a.value < b.value:
        a, b = b, a
    b.sibling = a.child
    a.child = b
    a.degree += 1
    return a


# (own, other, carry) at slot i -> (own slot i, outgoing carry), indexed by
# bool(own) + 2 * bool(other) + 4 * bool(carry)
_MERGE_CASES = (
    lambda t1, t2, carry: (None, None),
    lambda t1, t2, carry: (t1, None),
    lambda t1, t2, carry: (t2, None),
    lambda t1, t2, carry: (None, link(t1, t2)),
    lambda t1, t2, carry: (carry, None),
    lambda t1, t2, carry: (None, link(t1, carry)),
    lambda t1, t2, carry: (None, link(t2, carry)),
    lambda t1, t2, carry: (carry, link(t1, t2)),
)


class BinomialForest():
    """
    Binomial Heap (max-heap)

    Attributes:
        _trees: roots indexed by degree, None marks an empty slot
        _size: number of values in the heap

    Methods:
        insert(value): insert a value into the heap
        delete_max(): remove and return the greatest value
        merge(other): move every value of other into the heap
    """

    def __init__(self, iterable: Iterable = ()):
        self._trees: list[Optional[BinNode]] = []
        self._size = 0
        for value in iterable:
            self.insert(value)

    def __len__(self):
        return self._size

    def __bool__(self):
        return bool(self._trees)

    def __repr__(self):
        return f'BinomialForest(size={self._size}, degrees={self.degrees()})'

    def __iter__(self) -> Iterator:
        stack = [root for root in self._trees if root is not None]
        while stack:
            node = stack.pop()
            yield node.value
            stack.extend(node.children())

    def is_empty(self) -> bool:
        return not self._trees

    def degrees(self) -> list[int]:
        return [i for i, root in enumerate(self._trees) if root is not None]

    def roots(self):
        for i, root in enumerate(self._trees):
            if root is not None:
                yield i, root.value

    def insert(self, value: Any) -> None:
        self.merge(forest_of_singleton(value))

    def find_max_root(self) -> Optional[int]:
        """
        Index of the tree with the greatest root, None if empty.

        Equal roots resolve to the lowest degree.
        """
        index = None
        for i, root in enumerate(self._trees):
            if root is None:
                continue
            if index is None or self._trees[index].value < root.value:
                index = i
        return index

    def delete_max(self) -> Any:
        index = self.find_max_root()
        if index is None:
            log.debug('delete_max on empty forest')
            raise EmptyQueueError('delete_max from an empty forest')

        root = self._trees[index]
        self._trees[index] = None
        self._trim()
        self._size -= 1 << index

        self.merge(forest_from_children(root))
        return root.value

    def drain(self) -> Iterator:
        while self._trees:
            yield self.delete_max()

    def merge(self, other: 'BinomialForest') -> None:
        """
        Merge other into self, other is left empty.

        Ripple-carry addition over the degree slots of both forests.
        """
        if other is self:
            raise ValueError('cannot merge a forest into itself')
        if not other._trees:
            return

        trees, others = self._trees, other._trees
        carry = None
        i = 0
        while i < len(trees) or i < len(others) or carry is not None:
            if i == len(trees):
                trees.append(None)
            t2 = others[i] if i < len(others) else None
            case = ((trees[i] is not None) + 2 * (t2 is not None) +
                    4 * (carry is not None))
            trees[i], carry = _MERGE_CASES[case](trees[i], t2, carry)
            i += 1
        self._trim()

        self._size += other._size
        others.clear()
        other._size = 0

        if log.isEnabledFor(logging.DEBUG):
            log.debug('merged forest, size=%d degrees=%s', self._size,
                      self.degrees())

    def _trim(self):
        trees = self._trees
        while trees and trees[-1] is None:
            trees.pop()

    def is_valid(self) -> bool:
        """
        Check the binomial-heap invariants of every tree and the size count.
        """
        if self._trees and self._trees[-1] is None:
            return False
        total = 0
        for i, root in enumerate(self._trees):
            if root is None:
                continue
            if root.sibling is not None:
                return False
            size = _tree_size(root, i)
            if size is None:
                return False
            total += size
        return total == self._size


def _tree_size(node: BinNode, degree: int) -> Optional[int]:
    if node.degree != degree:
        return None
    size = 1
    expected = degree - 1
    for child in node.children():
        if child.degree != expected or node.value < child.value:
            return None
        sub = _tree_size(child, expected)
        if sub is None:
            return None
        size += sub
        expected -= 1
    if expected != -1:
        return None
    return size


def forest_of_singleton(value: Any) -> BinomialForest:
    forest = BinomialForest()
    forest._trees.append(BinNode(value))
    forest._size = 1
    return forest


def forest_from_children(node: BinNode) -> BinomialForest:
    """
    Detach the children of node into a new forest.

    Children hang off the sibling chain in decreasing degree, the forest
    wants them indexed by increasing degree.
    """
    trees = []
    child = node.child
    while child is not None:
        trees.append(child)
        child.sibling, child = None, child.sibling
    trees.reverse()

    forest = BinomialForest()
    forest._trees = trees
    forest._size = (1 << node.degree) - 1
    node.child, node.degree = None, 0
    return forest


def heap_union(a, b):
    """
    Union two Binomial Heaps
    """
    if a is None or a.is_empty():
        return b
    if b is None or b.is_empty():
        return a
    a.merge(b)
    return a


def heap_view(forest: BinomialForest) -> str:
    from treelib import Node, Tree

    ret = Tree()
    ret.add_node(Node(tag='forest', identifier='forest'))
    for degree, root in enumerate(forest._trees):
        if root is None:
            continue
        ret.add_node(Node(tag=f'degree {degree}', identifier=f'B{degree}'),
                     parent='forest')
        stack = [(root, f'B{degree}')]
        while stack:
            node, parent = stack.pop()
            ret.add_node(Node(tag=repr(node.value), identifier=id(node)),
                         parent=parent)
            stack.extend((child, id(node)) for child in node.children())
    return ret.show(stdout=False, sorting=False)
