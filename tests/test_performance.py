"""Performance checks for graph mapping.

These tests verify that deep and wide graphs map without exhausting the
call stack and within acceptable time.
Run with: pytest tests/test_performance.py -v
"""

import sys
import time

from graph_mapper import Mapper

from .fixtures import Book, BookDTO, BookEntry, NodeDTO, create_chain


class TestDeepGraphs:
    """Chains far longer than the recursion limit."""

    def test_long_chain(self):
        """A 10K-node chain should map without RecursionError."""
        length = max(10_000, sys.getrecursionlimit() * 5)
        head = create_chain(length)

        result = Mapper().convert(head, NodeDTO)

        assert result.objects_mapped == length
        node = result.value
        count = 0
        while node is not None:
            assert node.value == count
            node = node.next
            count += 1
        assert count == length

    def test_long_cycle(self):
        """Closing a long chain into a ring still maps every node once."""
        head = create_chain(5_000)
        tail = head
        while tail.next is not None:
            tail = tail.next
        tail.next = head

        head_dto = Mapper().map(head, NodeDTO)

        node = head_dto
        for _ in range(5_000):
            node = node.next
        assert node is head_dto


class TestWideGraphs:
    """Graphs with many siblings."""

    def test_wide_book(self):
        """A book with 10K entries should map in under 2s."""
        book = Book(1, "Wide")
        book.entries = [BookEntry(i, book) for i in range(10_000)]
        book.entries_by_id = {entry.id: entry for entry in book.entries}
        mapper = Mapper().strict_mode(True)

        start = time.perf_counter()
        book_dto = mapper.map(book, BookDTO)
        elapsed = time.perf_counter() - start

        assert len(book_dto.entries) == 10_000
        assert book_dto.entries_by_id[9_999] is book_dto.entries[-1]
        assert all(entry.book_dto is book_dto for entry in book_dto.entries)
        assert elapsed < 2.0, f"Mapping took {elapsed*1000:.1f}ms, expected <2000ms"

    def test_repeated_mappings(self):
        """Repeated calls should not accumulate state."""
        book = Book(1, "Book", [BookEntry(i) for i in range(100)])
        mapper = Mapper()

        first = mapper.convert(book, BookDTO)
        for _ in range(10):
            result = mapper.convert(book, BookDTO)
            assert result.objects_mapped == first.objects_mapped
