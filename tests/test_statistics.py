import math
import unittest

from depsample.evaluation.statistics import mean, std_dev, erf, normal_cdf, welch_t_test


class TestDescriptiveStatistics(unittest.TestCase):
    def test_mean(self):
        self.assertEqual(mean([1, 2, 3, 4, 5]), 3.0)
        self.assertEqual(mean([-1, -2, -3]), -2.0)
        self.assertAlmostEqual(mean([0.1, 0.2, 0.3]), 0.2)

    def test_population_std_dev(self):
        # Генеральная совокупность: sqrt(32 / 8) = 2, выборочная дала бы ~2.138
        self.assertAlmostEqual(std_dev([2, 4, 4, 4, 5, 5, 7, 9]), 2.0)
        self.assertEqual(std_dev([5, 5, 5, 5]), 0.0)
        self.assertAlmostEqual(std_dev([1, 3]), 1.0)

    def test_empty_input_is_nan(self):
        self.assertTrue(math.isnan(mean([])))
        self.assertTrue(math.isnan(std_dev([])))


class TestErrorFunction(unittest.TestCase):
    def test_known_values(self):
        self.assertAlmostEqual(erf(0.5), 0.5204999, places=6)
        self.assertAlmostEqual(erf(1.0), 0.8427008, places=6)
        self.assertAlmostEqual(erf(0.0), 0.0, places=6)
        self.assertAlmostEqual(erf(5.0), 1.0, places=6)

    def test_odd_symmetry(self):
        for x in [0.1, 0.5, 1.0, 1.7, 3.2]:
            self.assertEqual(erf(-x), -erf(x))

    def test_normal_cdf(self):
        self.assertAlmostEqual(normal_cdf(0), 0.5, places=7)
        self.assertAlmostEqual(normal_cdf(1.96), 0.975, places=3)
        self.assertAlmostEqual(normal_cdf(-1.96), 0.025, places=3)

    def test_normal_cdf_is_monotonic(self):
        values = [normal_cdf(z / 2) for z in range(-8, 9)]
        for a, b in zip(values, values[1:]):
            self.assertLess(a, b)
        self.assertTrue(all(0.0 <= v <= 1.0 for v in values))


class TestWelchTTest(unittest.TestCase):
    def test_welch_values(self):
        # Средние 3 и 4, дисперсии (ddof=0) по 2: t = -1 / sqrt(0.8), df = 0.64 / 0.08
        res = welch_t_test([1, 2, 3, 4, 5], [2, 3, 4, 5, 6])

        self.assertAlmostEqual(res.t_statistic, -1 / math.sqrt(0.8))
        self.assertAlmostEqual(res.df, 8.0)
        # Нормальная аппроксимация, а не распределение Стьюдента (там было бы ~0.296)
        self.assertAlmostEqual(res.p_value, 0.2636, places=3)

    def test_swap_symmetry(self):
        a = [10.2, 11.5, 9.8, 10.9, 12.1]
        b = [8.1, 9.9, 8.7, 9.2]
        ab = welch_t_test(a, b)
        ba = welch_t_test(b, a)

        self.assertEqual(ab.t_statistic, -ba.t_statistic)
        self.assertEqual(ab.p_value, ba.p_value)
        self.assertAlmostEqual(ab.df, ba.df)

    def test_similar_samples_have_large_p_value(self):
        res = welch_t_test([10, 11, 12, 10, 11], [10, 11, 12, 11, 10])
        self.assertGreater(res.p_value, 0.9)

    def test_different_samples_have_small_p_value(self):
        res = welch_t_test([1, 2, 1, 2, 1, 2], [10, 11, 10, 11, 10, 11])
        self.assertLess(res.p_value, 0.001)

    def test_identical_constant_samples_give_nan(self):
        res = welch_t_test([1.0, 1.0, 1.0], [1.0, 1.0, 1.0])
        self.assertTrue(math.isnan(res.t_statistic))
        self.assertTrue(math.isnan(res.p_value))
        self.assertFalse(res.is_defined)

    def test_single_observations_do_not_raise(self):
        res = welch_t_test([1.0], [2.0])
        self.assertTrue(math.isnan(res.df))
        self.assertTrue(math.isinf(res.t_statistic))

    def test_to_dict(self):
        res = welch_t_test([1, 2, 3], [2, 3, 4])
        self.assertEqual(set(res.to_dict()), {"t_statistic", "df", "p_value"})


if __name__ == '__main__':
    unittest.main()
