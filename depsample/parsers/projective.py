import logging
from typing import List, Optional

import numpy as np

from depsample.core.data_structures import Token, Arc, ParseGraph
from depsample.core.interfaces import BaseDependencyParser
from depsample.parsers.scoring import ScoringModel, DEFAULT_MODEL

logger = logging.getLogger(__name__)


def arcs_cross(a_head: int, a_dep: int, b_head: int, b_dep: int) -> bool:
    """
    Проверка на пересечение дуг (start < start' < end < end').
    Вложенные и непересекающиеся интервалы допустимы.
    """
    a1, a2 = sorted((a_head, a_dep))
    b1, b2 = sorted((b_head, b_dep))
    return (a1 < b1 < a2 < b2) or (b1 < a1 < b2 < a2)


class ProjectiveHeadSelector(BaseDependencyParser):
    """
    Жадный проективный выбор вершин ("Eisner" по названию).

    Это НЕ динамическое программирование Айснера: зависимые обрабатываются
    слева направо, и для каждого выбирается лучшая вершина среди тех, чья дуга
    не пересекает уже зафиксированные. Результат зависит от порядка обхода.
    """

    name = "projective"

    def __init__(self, model: Optional[ScoringModel] = None):
        self.model = model or DEFAULT_MODEL

    @staticmethod
    def select_heads(score: np.ndarray) -> List[int]:
        """
        Принимает матрицу оценок (n+1)x(n+1).
        Возвращает parent[0..n], parent[0] = -1.
        """
        n = score.shape[0] - 1
        parent = [-1] * (n + 1)

        for j in range(1, n + 1):
            max_score = float("-inf")
            best_head = 0

            for i in range(n + 1):
                if i == j:
                    continue

                is_projective = True
                for k in range(1, n + 1):
                    if k == j or parent[k] == -1:
                        continue
                    if arcs_cross(i, j, parent[k], k):
                        is_projective = False
                        break

                if is_projective and score[i, j] > max_score:
                    max_score = score[i, j]
                    best_head = i

            if max_score == float("-inf"):
                logger.debug(f"No projective head for token {j}, attaching to ROOT")
            parent[j] = best_head

        return parent

    def _parse(self, tokens: List[Token]) -> ParseGraph:
        score = self.model.build_matrix(tokens)
        parent = self.select_heads(score)

        arcs = [Arc(head=parent[j], dependent=j) for j in range(1, len(tokens) + 1)]
        weights = [score[a.head, a.dependent] for a in arcs]
        return self.build_graph(tokens, arcs, weights)


def parse_projective(tokens) -> ParseGraph:
    return ProjectiveHeadSelector().parse(tokens)
