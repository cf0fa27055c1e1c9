import logging
from typing import Iterable, Dict, Set, Tuple

from depsample.core.data_structures import GraphEdge

logger = logging.getLogger(__name__)


class SimilarityCalculator:
    """
    Структурное сходство двух разборов: пересечение множеств дуг (Jaccard)
    и доля зависимых, получивших ту же вершину (attachment score).
    """

    @staticmethod
    def edge_set(edges: Iterable[GraphEdge]) -> Set[Tuple[str, str]]:
        return {(e.source, e.target) for e in edges}

    @staticmethod
    def head_map(edges: Iterable[GraphEdge]) -> Dict[str, str]:
        # dependent -> head; при повторе зависимого побеждает последняя дуга
        heads = {}
        for e in edges:
            heads[e.target] = e.source
        return heads

    def jaccard(self, edges_a: Iterable[GraphEdge], edges_b: Iterable[GraphEdge]) -> float:
        set_a = self.edge_set(edges_a)
        set_b = self.edge_set(edges_b)

        union = set_a | set_b
        if not union:
            return 1.0
        return len(set_a & set_b) / len(union)

    def attachment_score(self, edges_a: Iterable[GraphEdge], edges_b: Iterable[GraphEdge]) -> float:
        heads_a = self.head_map(edges_a)
        heads_b = self.head_map(edges_b)

        dependents = heads_a.keys() | heads_b.keys()
        if not dependents:
            return 1.0

        # Зависимый, присутствующий только в одной карте, не совпадает никогда
        matches = sum(
            1 for d in dependents
            if d in heads_a and d in heads_b and heads_a[d] == heads_b[d]
        )
        return matches / len(dependents)


_calculator = SimilarityCalculator()


def jaccard(edges_a: Iterable[GraphEdge], edges_b: Iterable[GraphEdge]) -> float:
    return _calculator.jaccard(edges_a, edges_b)


def attachment_score(edges_a: Iterable[GraphEdge], edges_b: Iterable[GraphEdge]) -> float:
    return _calculator.attachment_score(edges_a, edges_b)
