import unittest

from relearn.hashing import hash_combine, HASH_COMBINE_CONSTANT, SIZE_T_MASK


class TestHashCombine(unittest.TestCase):

    def test_zero_seed(self):
        # hash(0) == 0, so only the constant is mixed in
        self.assertEqual(hash_combine(0, 0), HASH_COMBINE_CONSTANT)
        self.assertEqual(hash_combine(0, 5), HASH_COMBINE_CONSTANT + 5)

    def test_nonzero_seed(self):
        seed = HASH_COMBINE_CONSTANT
        expected = seed ^ (1 + HASH_COMBINE_CONSTANT + (seed << 6) + (seed >> 2))
        self.assertEqual(hash_combine(seed, 1), expected & SIZE_T_MASK)

    def test_order_sensitive(self):
        self.assertNotEqual(
            hash_combine(hash_combine(0, 1), 2),
            hash_combine(hash_combine(0, 2), 1)
        )

    def test_stays_within_size_t(self):
        seed = 0
        for value in [-1, -2, SIZE_T_MASK, "left", (3, "right"), 2.5, None]:
            seed = hash_combine(seed, value)
            self.assertGreaterEqual(seed, 0)
            self.assertLessEqual(seed, SIZE_T_MASK)

    def test_negative_hash_wraps(self):
        self.assertEqual(hash_combine(0, -2), (SIZE_T_MASK - 1 + HASH_COMBINE_CONSTANT) & SIZE_T_MASK)

    def test_deterministic(self):
        self.assertEqual(hash_combine(hash_combine(0, "s0"), "left"), hash_combine(hash_combine(0, "s0"), "left"))

    def test_unhashable(self):
        with self.assertRaises(TypeError):
            hash_combine(0, [1, 2])
