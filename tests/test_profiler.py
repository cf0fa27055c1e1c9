import unittest

from depsample.core.data_structures import Token
from depsample.parsers import parse_arc_standard, parse_greedy_arborescence
from depsample.profiler import GraphProfiler


def make_tokens(*pairs):
    return [Token(text=text, pos=pos, idx=i) for i, (text, pos) in enumerate(pairs)]


THE_DOG_BARKS = make_tokens(("the", "Determiner"), ("dog", "Noun"), ("barks", "Verb"))
TWO_NOUNS = make_tokens(("cats", "Noun"), ("dogs", "Noun"))


class TestGraphProfiler(unittest.TestCase):
    def setUp(self):
        self.profiler = GraphProfiler()

    def test_tree_profile(self):
        profile = self.profiler.profile_graph(parse_arc_standard(THE_DOG_BARKS))

        self.assertEqual(profile["length"], 3)
        self.assertFalse(profile["has_cycle"])
        self.assertFalse(profile["non_projectivity"])
        # ROOT -> barks -> dog -> the
        self.assertEqual(profile["tree_depth"], 3)
        self.assertEqual(profile["root_children"], 1)

    def test_cycle_detection(self):
        profile = self.profiler.profile_graph(parse_greedy_arborescence(TWO_NOUNS))

        self.assertTrue(profile["has_cycle"])
        self.assertEqual(profile["tree_depth"], -1)
        self.assertEqual(profile["root_children"], 0)

    def test_non_projectivity(self):
        # Синтетический пример пересечения дуг: 1 -> 3, 2 -> 4 (1 < 2 < 3 < 4)
        self.assertTrue(self.profiler._is_non_projective([(1, 3), (2, 4)]))
        self.assertTrue(self.profiler._is_non_projective([(3, 1), (4, 2)]))
        self.assertFalse(self.profiler._is_non_projective([(0, 4), (1, 3), (3, 2)]))

    def test_greedy_crossing_is_reported(self):
        tokens = make_tokens(
            ("quietly", "Adverb"), ("the", "Determiner"), ("sang", "Verb"), ("birds", "Noun")
        )
        profile = self.profiler.profile_graph(parse_greedy_arborescence(tokens))
        self.assertTrue(profile["non_projectivity"])

    def test_profile_corpus(self):
        graphs = [
            parse_arc_standard(THE_DOG_BARKS),
            parse_greedy_arborescence(TWO_NOUNS),
            parse_arc_standard([]),
        ]
        summary = self.profiler.profile_corpus(graphs)

        self.assertEqual(summary["sentences"], 2)
        self.assertEqual(summary["cyclic"], 1)
        self.assertEqual(summary["non_projective"], 0)
        self.assertEqual(summary["max_tree_depth"], 3)

    def test_to_digraph(self):
        g = self.profiler.to_digraph(parse_arc_standard(THE_DOG_BARKS))
        self.assertEqual(g.number_of_nodes(), 4)
        self.assertTrue(g.has_edge("barks_2", "dog_1"))


if __name__ == '__main__':
    unittest.main()
