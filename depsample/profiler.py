import logging
from typing import Dict, Iterable, List, Tuple

import networkx as nx

from depsample.core.data_structures import ParseGraph, ROOT_ID

logger = logging.getLogger(__name__)


class GraphProfiler:
    """
    Структурные характеристики результата разбора: циклы, непроективность, глубина.
    Ничего не исправляет - только измеряет.
    """

    def profile_graph(self, graph: ParseGraph) -> dict:
        arcs = self._index_arcs(graph)
        has_cycle = self._has_cycle(graph)

        return {
            "length": max(len(graph.nodes) - 1, 0),
            "has_cycle": has_cycle,
            "non_projectivity": self._is_non_projective(arcs),
            "tree_depth": -1 if has_cycle else self._calculate_tree_depth(graph),
            "root_children": sum(1 for e in graph.edges if e.source == ROOT_ID),
        }

    def profile_corpus(self, graphs: Iterable[ParseGraph]) -> dict:
        summary = {
            "sentences": 0,
            "cyclic": 0,
            "non_projective": 0,
            "max_tree_depth": 0,
        }
        for graph in graphs:
            if graph.is_empty:
                continue
            profile = self.profile_graph(graph)
            summary["sentences"] += 1
            summary["cyclic"] += int(profile["has_cycle"])
            summary["non_projective"] += int(profile["non_projectivity"])
            summary["max_tree_depth"] = max(summary["max_tree_depth"], profile["tree_depth"])
        return summary

    @staticmethod
    def to_digraph(graph: ParseGraph) -> nx.DiGraph:
        g = nx.DiGraph()
        g.add_nodes_from(n.id for n in graph.nodes)
        g.add_edges_from((e.source, e.target) for e in graph.edges)
        return g

    @staticmethod
    def _index_arcs(graph: ParseGraph) -> List[Tuple[int, int]]:
        # Позиция вершины в списке совпадает с индексом (ROOT = 0)
        positions: Dict[str, int] = {n.id: i for i, n in enumerate(graph.nodes)}
        return [(positions[e.source], positions[e.target]) for e in graph.edges]

    def _has_cycle(self, graph: ParseGraph) -> bool:
        return not nx.is_directed_acyclic_graph(self.to_digraph(graph))

    def _calculate_tree_depth(self, graph: ParseGraph) -> int:
        """
        Максимальное число дуг от ROOT до листа.
        """
        g = self.to_digraph(graph)
        if ROOT_ID not in g:
            return 0
        lengths = nx.shortest_path_length(g, source=ROOT_ID)
        return max(lengths.values())

    @staticmethod
    def _is_non_projective(arcs: List[Tuple[int, int]]) -> bool:
        """
        Проверка на пересечение дуг (start < end < start < end).
        """
        spans = [tuple(sorted(a)) for a in arcs]

        for i in range(len(spans)):
            for j in range(i + 1, len(spans)):
                s1, e1 = spans[i]
                s2, e2 = spans[j]

                if s1 < s2 < e1 < e2:
                    return True
                if s2 < s1 < e2 < e1:
                    return True

        return False
