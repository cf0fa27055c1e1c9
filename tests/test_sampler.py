import unittest

from depsample.sampler import RandomSubsetSampler


class TestRandomSubsetSampler(unittest.TestCase):
    def setUp(self):
        self.sampler = RandomSubsetSampler(seed=7)

    def test_unique_indices_in_range(self):
        indices = self.sampler.draw_indices(100, 40)
        self.assertEqual(len(indices), 40)
        self.assertEqual(len(set(indices)), 40)
        self.assertTrue(all(0 <= i < 100 for i in indices))

    def test_sample_count_is_floored(self):
        self.assertEqual(RandomSubsetSampler.sample_count(10, 0.25), 2)
        self.assertEqual(RandomSubsetSampler.sample_count(1000, 0.2), 200)
        self.assertEqual(RandomSubsetSampler.sample_count(3, 0.2), 0)

    def test_full_population_does_not_loop(self):
        self.assertEqual(self.sampler.draw_indices(5, 5), [0, 1, 2, 3, 4])
        self.assertEqual(self.sampler.draw_indices(5, 50), [0, 1, 2, 3, 4])
        self.assertEqual(self.sampler.sample(["a", "b", "c"], 1.0), ["a", "b", "c"])

    def test_zero_count(self):
        self.assertEqual(self.sampler.draw_indices(10, 0), [])
        self.assertEqual(self.sampler.draw_indices(0, 3), [])

    def test_attempt_bound_fills_remainder(self):
        # Без единой попытки все индексы добираются из остатка
        sampler = RandomSubsetSampler(seed=1, attempt_factor=0)
        indices = sampler.draw_indices(100, 99)
        self.assertEqual(len(indices), 99)
        self.assertEqual(len(set(indices)), 99)

    def test_seed_is_reproducible(self):
        first = RandomSubsetSampler(seed=42).draw_indices(1000, 200)
        second = RandomSubsetSampler(seed=42).draw_indices(1000, 200)
        self.assertEqual(first, second)

    def test_sample_items(self):
        items = [f"s{i}" for i in range(20)]
        sample = self.sampler.sample(items, 0.5)
        self.assertEqual(len(sample), 10)
        self.assertTrue(set(sample) <= set(items))

    def test_invalid_fraction(self):
        for fraction in (0.0, -0.1, 1.5):
            with self.assertRaises(ValueError):
                self.sampler.sample([1, 2, 3], fraction)


if __name__ == '__main__':
    unittest.main()
