"""
Test cases for page navigation.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nodturn.navigation import PageNavigator
from nodturn.controller_mock import MockNavigator
from nodturn.types import NavigatorProto


class TestPageNavigator(unittest.TestCase):
    """Test boundary-safe page moves."""

    def setUp(self):
        self.pages = PageNavigator(total_pages=3)
        self.changes = []
        self.pages.subscribe(lambda page, total: self.changes.append((page, total)))

    def test_advance_stops_at_last_page(self):
        for _ in range(5):
            self.pages.advance()
        self.assertEqual(self.pages.current_page, 3)
        self.assertEqual(self.changes, [(2, 3), (3, 3)])

    def test_retreat_stops_at_first_page(self):
        self.pages.retreat()
        self.assertEqual(self.pages.current_page, 1)
        self.assertEqual(self.changes, [])

    def test_go_to_clamps(self):
        self.pages.go_to(99)
        self.assertEqual(self.pages.current_page, 3)
        self.pages.go_to(-4)
        self.assertEqual(self.pages.current_page, 1)

    def test_first_and_last(self):
        self.pages.last()
        self.assertEqual(self.pages.current_page, 3)
        self.pages.first()
        self.assertEqual(self.pages.current_page, 1)

    def test_shrinking_document_clamps_page(self):
        self.pages.last()
        self.pages.set_total_pages(2)
        self.assertEqual(self.pages.current_page, 2)

    def test_empty_document(self):
        pages = PageNavigator()
        pages.advance()
        pages.retreat()
        self.assertEqual(pages.current_page, 1)

    def test_unsubscribe(self):
        unsubscribe = self.pages.subscribe(lambda page, total: self.fail("should be removed"))
        unsubscribe()
        self.pages.advance()
        self.assertEqual(self.pages.current_page, 2)

    def test_reset(self):
        self.pages.advance()
        self.pages.reset()
        self.assertEqual(self.pages.current_page, 1)
        self.assertEqual(self.pages.total_pages, 0)

    def test_satisfies_protocol(self):
        self.assertIsInstance(self.pages, NavigatorProto)
        self.assertIsInstance(MockNavigator(), NavigatorProto)


class TestMockNavigator(unittest.TestCase):

    def test_counts_calls(self):
        nav = MockNavigator()
        nav.advance()
        nav.advance()
        nav.retreat()
        self.assertEqual((nav.advance_count, nav.retreat_count), (2, 1))
        nav.reset_counters()
        self.assertEqual((nav.advance_count, nav.retreat_count), (0, 0))


if __name__ == '__main__':
    unittest.main()
