###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""
Module containing a double-ended priority queue data structure.

The min-max heap is for algorithmic use. It is not thread-safe, and not
intended to be used in multi-threaded or multi-process applications without
an external lock around every operation.
"""

import collections.abc
import logging
import operator
from typing import Callable, Iterable, Iterator, TypeVar

from mmheap.auxiliary.typingutils import SupportsRichComparison

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "EmptyHeapError",
    "MinMaxHeap"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return tuple(sorted(__all__))


class EmptyHeapError(IndexError):
    """Raised when an operation requires a non-empty heap."""


ST = TypeVar("ST", bound=SupportsRichComparison)


def _is_min_level(index: int) -> bool:
    """
    Return whether the node at the given index lies on a min level.

    The depth of a node is the number of parent steps to the root, which for
    a breadth-first layout is one less than the bit length of `index + 1`.
    """
    return ((index + 1).bit_length() - 1) % 2 == 0


class MinMaxHeap(collections.abc.Collection[ST]):
    """
    A min-max heap implementation.

    A min-max heap is a double-ended priority queue, giving constant time
    access to both its minimum and maximum values, and logarithmic time
    insertion and removal at either end, without maintaining two heaps.

    The values are stored in a list representing a complete binary tree in
    breadth-first order. Nodes at even depths (min levels) are less than or
    equal to all of their descendants, and nodes at odd depths (max levels)
    are greater than or equal to all of their descendants. Therefore the
    minimum is always the root, and the maximum is always one of the root's
    children (or the root itself if it has none).

    Iterating over the heap does not yield values in priority order, use
    `iter_ordered()` for that.

    Instances are not thread-safe.

    Example Usage
    -------------
    ```
    from mmheap.datastructures.heaps import MinMaxHeap

    >>> heap: MinMaxHeap[int] = MinMaxHeap(10, 5, 30, 3, 17, 22)
    >>> heap.peek_min(), heap.peek_max()
    (3, 30)
    >>> heap.pop_min(), heap.pop_max()
    (3, 30)
    >>> heap.peek_min(), heap.peek_max(), len(heap)
    (5, 22, 4)
    ```
    """

    __slots__ = {
        "__heap": "The list of values in breadth-first tree order.",
        "__log": "Whether to log pushes and pops."
    }

    __HEAP_LOGGER = logging.getLogger("MinMaxHeap")

    def __init__(self, *items: ST, log: bool = False) -> None:
        """
        Create a min-max heap, optionally from a series of items.

        Set `log` to log pushes and pops at debug level to the
        `"MinMaxHeap"` logger.
        """
        self.__heap: list[ST] = []
        self.__log: bool = log
        for item in items:
            self.push(item)

    @classmethod
    def from_iterable(
        cls,
        iterable: Iterable[ST], /, *,
        log: bool = False
    ) -> "MinMaxHeap[ST]":
        """Create a min-max heap from an iterable."""
        return cls(*iterable, log=log)

    # pylint: disable=W0212,W0238
    def copy(self) -> "MinMaxHeap[ST]":
        """Return a shallow copy of the heap."""
        heap: "MinMaxHeap[ST]" = self.__class__(log=self.__log)
        heap.__heap = self.__heap.copy()
        return heap

    def __str__(self) -> str:
        """Return a string representation of the heap."""
        return f"Min-Max Heap with {len(self)} items"

    def __repr__(self) -> str:
        """Return an instantiable string representation of the heap."""
        heap = ", ".join(repr(item) for item in self.__heap)
        return f"{self.__class__.__name__}({heap})"

    def __contains__(self, item: object) -> bool:
        """Return whether an item is in the heap."""
        return item in self.__heap

    def __iter__(self) -> Iterator[ST]:
        """
        Return an iterator over the items in the heap.

        The items are yielded in breadth-first tree order (not in sorted
        order).
        """
        yield from self.__heap.copy()

    def __len__(self) -> int:
        """Return the number of items in the heap."""
        return len(self.__heap)

    def __bool__(self) -> bool:
        """Return True if the heap is not empty."""
        return bool(self.__heap)

    def size(self) -> int:
        """Return the number of items in the heap."""
        return len(self.__heap)

    def empty(self) -> bool:
        """Return whether the heap contains no items."""
        return not self.__heap

    def clear(self) -> None:
        """Remove all items from the heap."""
        self.__heap.clear()

    def iter_ordered(self, reverse: bool = False) -> Iterator[ST]:
        """
        Iterate over the items in the heap in sorted order.

        The heap itself is not modified, the items are popped from a copy.

        Parameters
        ----------
        `reverse: bool = False` - Whether to iterate in descending order
        instead of ascending order.

        Returns
        -------
        `Iterator[ST]` - An iterator over the items in sorted order.
        """
        heap = self.copy()
        heap.__log = False
        pop = heap.pop_max if reverse else heap.pop_min
        while heap:
            yield pop()

    def push(self, item: ST, /) -> None:
        """
        Push an item onto the heap in-place.

        Parameters
        ----------
        `item: ST@MinMaxHeap` - The item to push.
        """
        self.__heap.append(item)
        self.__bubble_up(len(self.__heap) - 1)
        if self.__log:
            self.__HEAP_LOGGER.debug(
                "Pushed %r, heap size is now %d.", item, len(self.__heap)
            )

    def push_all(self, *items: ST) -> None:
        """Push a series of items onto the heap in-place."""
        for item in items:
            self.push(item)

    def push_from(self, iterable: Iterable[ST], /) -> None:
        """Push an iterable of items onto the heap in-place."""
        for item in iterable:
            self.push(item)

    def peek_min(self) -> ST:
        """
        Peek at the minimum item in the heap.

        Raises
        ------
        `EmptyHeapError` - If the heap is empty.
        """
        if not self.__heap:
            raise EmptyHeapError("Peek min from empty min-max heap.")
        return self.__heap[0]

    def peek_max(self) -> ST:
        """
        Peek at the maximum item in the heap.

        Raises
        ------
        `EmptyHeapError` - If the heap is empty.
        """
        if not self.__heap:
            raise EmptyHeapError("Peek max from empty min-max heap.")
        return self.__heap[self.__max_index()]

    def pop_min(self) -> ST:
        """
        Pop the minimum item from the heap.

        Returns
        -------
        `ST@MinMaxHeap` - The minimum item.

        Raises
        ------
        `EmptyHeapError` - If the heap is empty.
        """
        heap = self.__heap
        if not heap:
            raise EmptyHeapError("Pop min from empty min-max heap.")
        item = heap[0]
        last = heap.pop()
        if heap:
            heap[0] = last
            self.__trickle_down(0)
        if self.__log:
            self.__HEAP_LOGGER.debug(
                "Popped min %r, heap size is now %d.", item, len(heap)
            )
        return item

    def pop_max(self) -> ST:
        """
        Pop the maximum item from the heap.

        Returns
        -------
        `ST@MinMaxHeap` - The maximum item.

        Raises
        ------
        `EmptyHeapError` - If the heap is empty.
        """
        heap = self.__heap
        if not heap:
            raise EmptyHeapError("Pop max from empty min-max heap.")
        index = self.__max_index()
        item = heap[index]
        last = heap.pop()
        # The vacated slot no longer exists if it was the last one.
        if index < len(heap):
            heap[index] = last
            self.__trickle_down(index)
        if self.__log:
            self.__HEAP_LOGGER.debug(
                "Popped max %r, heap size is now %d.", item, len(heap)
            )
        return item

    def replace_min(self, item: ST, /) -> ST:
        """
        Pop the minimum item and push the given item in a single pass.

        Unlike `push_pop_min()`, the returned item is always the minimum
        before the given item was pushed.

        Raises
        ------
        `EmptyHeapError` - If the heap is empty.
        """
        heap = self.__heap
        if not heap:
            raise EmptyHeapError("Replace min in empty min-max heap.")
        minimum = heap[0]
        heap[0] = item
        self.__trickle_down(0)
        return minimum

    def replace_max(self, item: ST, /) -> ST:
        """
        Pop the maximum item and push the given item in a single pass.

        Unlike `push_pop_max()`, the returned item is always the maximum
        before the given item was pushed.

        Raises
        ------
        `EmptyHeapError` - If the heap is empty.
        """
        heap = self.__heap
        if not heap:
            raise EmptyHeapError("Replace max in empty min-max heap.")
        index = self.__max_index()
        maximum = heap[index]
        if index == 0:
            heap[0] = item
            return maximum
        # The root must stay the minimum, so a smaller item takes its place.
        if item < heap[0]:
            heap[index] = heap[0]
            heap[0] = item
        else:
            heap[index] = item
        self.__trickle_down(index)
        return maximum

    def push_pop_min(self, item: ST, /) -> ST:
        """
        Push an item onto the heap and then pop the minimum item.

        This is more efficient than pushing and then popping separately.
        """
        if not self.__heap or not self.__heap[0] < item:
            return item
        return self.replace_min(item)

    def push_pop_max(self, item: ST, /) -> ST:
        """
        Push an item onto the heap and then pop the maximum item.

        This is more efficient than pushing and then popping separately.
        """
        if not self.__heap or not self.__heap[self.__max_index()] > item:
            return item
        return self.replace_max(item)

    def is_valid(self) -> bool:
        """
        Return whether the heap satisfies the min-max ordering.

        Each node is checked against its children and grandchildren only,
        which by transitivity covers all of its descendants.
        """
        heap = self.__heap
        size = len(heap)
        for index, item in enumerate(heap):
            before = operator.lt if _is_min_level(index) else operator.gt
            descendants = (
                *range(2 * index + 1, min(2 * index + 3, size)),
                *range(4 * index + 3, min(4 * index + 7, size))
            )
            for descendant in descendants:
                if before(heap[descendant], item):
                    return False
        return True

    def __max_index(self) -> int:
        """Get the index of the maximum item of a non-empty heap."""
        heap = self.__heap
        if len(heap) == 1:
            return 0
        if len(heap) > 2 and heap[2] > heap[1]:
            return 2
        return 1

    def __swap(self, index_a: int, index_b: int) -> None:
        heap = self.__heap
        heap[index_a], heap[index_b] = heap[index_b], heap[index_a]

    def __bubble_up(self, index: int) -> None:
        """Restore the ordering after appending an item at the given index."""
        if index == 0:
            return
        heap = self.__heap
        parent = (index - 1) // 2
        if _is_min_level(index):
            # The parent is on a max level.
            if heap[index] > heap[parent]:
                self.__swap(index, parent)
                self.__bubble_up_grandparents(parent, operator.gt)
            else:
                self.__bubble_up_grandparents(index, operator.lt)
        else:
            if heap[index] < heap[parent]:
                self.__swap(index, parent)
                self.__bubble_up_grandparents(parent, operator.lt)
            else:
                self.__bubble_up_grandparents(index, operator.gt)

    def __bubble_up_grandparents(
        self,
        index: int,
        before: Callable[[ST, ST], bool]
    ) -> None:
        """
        Climb the chain of same-level ancestors, two levels at a time.

        The `before` comparison is `operator.lt` on min levels and
        `operator.gt` on max levels.
        """
        heap = self.__heap
        while index > 2:
            grandparent = (index - 3) // 4
            if not before(heap[index], heap[grandparent]):
                return
            self.__swap(index, grandparent)
            index = grandparent

    def __trickle_down(self, index: int) -> None:
        """Restore the ordering after dropping an item into the given index."""
        if _is_min_level(index):
            self.__trickle_down_level(index, operator.lt)
        else:
            self.__trickle_down_level(index, operator.gt)

    def __trickle_down_level(
        self,
        index: int,
        before: Callable[[ST, ST], bool]
    ) -> None:
        heap = self.__heap
        size = len(heap)
        while True:
            first_child = 2 * index + 1
            if first_child >= size:
                return

            # Find the extremal item among the children and grandchildren.
            extremal = first_child
            candidates = (
                *range(first_child + 1, min(first_child + 2, size)),
                *range(4 * index + 3, min(4 * index + 7, size))
            )
            for candidate in candidates:
                if before(heap[candidate], heap[extremal]):
                    extremal = candidate

            if not before(heap[extremal], heap[index]):
                return
            self.__swap(extremal, index)

            # A swapped child cannot break the ordering any deeper.
            if extremal <= first_child + 1:
                return

            # The item moved down to the grandchild may be out of order with
            # its parent, which lies on the opposite level.
            parent = (extremal - 1) // 2
            if before(heap[parent], heap[extremal]):
                self.__swap(extremal, parent)
            index = extremal

    # Aliases for the classic double-ended priority queue operation names.
    insert = push
    getMin = peek_min  # pylint: disable=C0103
    getMax = peek_max  # pylint: disable=C0103
    extractMin = pop_min  # pylint: disable=C0103
    extractMax = pop_max  # pylint: disable=C0103
