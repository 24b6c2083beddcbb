from __future__ import annotations

import unittest

from foldview.structures import SparseVector


class SparseVectorBehaviorTests(unittest.TestCase):
    def test_fresh_vector_is_empty(self) -> None:
        vector: SparseVector[str] = SparseVector()

        self.assertEqual(vector.length(), 0)
        self.assertEqual(vector.elements(), 0)
        self.assertIsNone(vector.value_at(0))

    def test_values_follow_insertions_before_them(self) -> None:
        vector: SparseVector[str] = SparseVector()
        vector.insert_space(0, 5)
        vector.set_value_at(2, "a")

        vector.insert_space(2, 3)
        self.assertEqual(vector.length(), 8)
        self.assertIsNone(vector.value_at(2))
        self.assertEqual(vector.value_at(5), "a")

        vector.insert_space(6, 1)
        self.assertEqual(vector.value_at(5), "a")
        self.assertEqual(vector.length(), 9)

    def test_delete_position_shifts_and_drops_entries(self) -> None:
        vector: SparseVector[str] = SparseVector()
        vector.insert_space(0, 6)
        vector.set_value_at(1, "x")
        vector.set_value_at(4, "y")

        vector.delete_position(0)
        self.assertEqual(list(vector.items()), [(0, "x"), (3, "y")])

        vector.delete_position(0)
        self.assertEqual(list(vector.items()), [(2, "y")])
        self.assertEqual(vector.elements(), 1)
        self.assertEqual(len(vector), 4)

    def test_setting_none_removes_entry(self) -> None:
        vector: SparseVector[str] = SparseVector()
        vector.insert_space(0, 3)
        vector.set_value_at(1, None)
        vector.set_value_at(1, "label")
        vector.set_value_at(1, "other")

        self.assertEqual(vector.value_at(1), "other")
        self.assertEqual(vector.elements(), 1)

        vector.set_value_at(1, None)
        self.assertEqual(vector.elements(), 0)

    def test_out_of_range_edits_raise(self) -> None:
        vector: SparseVector[str] = SparseVector()
        vector.insert_space(0, 2)

        with self.assertRaises(ValueError):
            vector.set_value_at(2, "x")
        with self.assertRaises(ValueError):
            vector.insert_space(3, 1)
        with self.assertRaises(ValueError):
            vector.delete_position(2)

    def test_delete_all_clears_entries(self) -> None:
        vector: SparseVector[str] = SparseVector()
        vector.insert_space(0, 2)
        vector.set_value_at(0, "x")

        vector.delete_all()

        self.assertEqual(vector.length(), 0)
        self.assertEqual(list(vector.items()), [])


if __name__ == "__main__":
    unittest.main()
