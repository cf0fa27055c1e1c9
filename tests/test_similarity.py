import unittest

from depsample.core.data_structures import GraphEdge
from depsample.evaluation.similarity import SimilarityCalculator, jaccard, attachment_score


def edges(*pairs):
    return [GraphEdge(source=s, target=t) for s, t in pairs]


class TestJaccard(unittest.TestCase):
    def setUp(self):
        self.calc = SimilarityCalculator()
        self.a = edges(("ROOT", "barks_2"), ("barks_2", "dog_1"), ("dog_1", "the_0"))
        self.b = edges(("ROOT", "barks_2"), ("barks_2", "dog_1"), ("barks_2", "the_0"))

    def test_reflexive(self):
        self.assertEqual(self.calc.jaccard(self.a, self.a), 1.0)

    def test_both_empty(self):
        self.assertEqual(self.calc.jaccard([], []), 1.0)

    def test_one_empty(self):
        self.assertEqual(self.calc.jaccard(self.a, []), 0.0)

    def test_partial_overlap(self):
        # Пересечение 2, объединение 4
        self.assertAlmostEqual(self.calc.jaccard(self.a, self.b), 0.5)

    def test_symmetric(self):
        self.assertEqual(self.calc.jaccard(self.a, self.b), self.calc.jaccard(self.b, self.a))

    def test_direction_matters(self):
        reversed_edges = edges(("the_0", "dog_1"))
        self.assertEqual(self.calc.jaccard(edges(("dog_1", "the_0")), reversed_edges), 0.0)

    def test_duplicates_and_weights_are_ignored(self):
        weighted = [GraphEdge(source="ROOT", target="x_0", weight=0.2)]
        doubled = edges(("ROOT", "x_0"), ("ROOT", "x_0"))
        self.assertEqual(jaccard(weighted, doubled), 1.0)


class TestAttachmentScore(unittest.TestCase):
    def setUp(self):
        self.calc = SimilarityCalculator()

    def test_identical(self):
        a = edges(("ROOT", "barks_2"), ("barks_2", "dog_1"))
        self.assertEqual(self.calc.attachment_score(a, a), 1.0)

    def test_empty_union(self):
        self.assertEqual(self.calc.attachment_score([], []), 1.0)

    def test_head_mismatch(self):
        a = edges(("ROOT", "barks_2"), ("barks_2", "dog_1"))
        b = edges(("ROOT", "barks_2"), ("ROOT", "dog_1"))
        # barks_2 совпал, dog_1 нет
        self.assertEqual(self.calc.attachment_score(a, b), 0.5)

    def test_dependent_in_one_map_never_matches(self):
        a = edges(("ROOT", "barks_2"), ("barks_2", "dog_1"))
        b = edges(("ROOT", "barks_2"))
        self.assertEqual(self.calc.attachment_score(a, b), 0.5)

    def test_last_edge_wins_for_repeated_dependent(self):
        a = edges(("x_1", "y_0"), ("z_2", "y_0"))
        b = edges(("z_2", "y_0"))
        self.assertEqual(attachment_score(a, b), 1.0)

    def test_symmetric_and_bounded(self):
        a = edges(("ROOT", "a_0"), ("a_0", "b_1"), ("b_1", "c_2"))
        b = edges(("ROOT", "b_1"), ("b_1", "a_0"), ("b_1", "c_2"), ("c_2", "d_3"))
        ab = self.calc.attachment_score(a, b)
        self.assertEqual(ab, self.calc.attachment_score(b, a))
        self.assertGreaterEqual(ab, 0.0)
        self.assertLessEqual(ab, 1.0)


if __name__ == '__main__':
    unittest.main()
