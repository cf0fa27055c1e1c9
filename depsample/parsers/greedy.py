import logging
from typing import List, Optional

import numpy as np

from depsample.core.data_structures import Token, Arc, ParseGraph
from depsample.core.interfaces import BaseDependencyParser
from depsample.parsers.scoring import ScoringModel, DEFAULT_MODEL

logger = logging.getLogger(__name__)


class GreedyHeadSelector(BaseDependencyParser):
    """
    Независимый выбор лучшей входящей дуги для каждого токена ("Chu-Liu/Edmonds" по названию).

    Выполняется только первый шаг алгоритма Чу-Лю/Эдмондса: сжатия циклов нет,
    поэтому между обычными токенами возможны циклы. Они являются ожидаемым результатом.
    """

    name = "greedy"

    def __init__(self, model: Optional[ScoringModel] = None):
        self.model = model or DEFAULT_MODEL

    @staticmethod
    def select_heads(score: np.ndarray) -> List[int]:
        n = score.shape[0] - 1
        parent = [-1] * (n + 1)

        for j in range(1, n + 1):
            column = score[:, j].copy()
            column[j] = -np.inf
            # argmax берёт первый максимум, т.е. ничьи решаются в пользу меньшего i
            parent[j] = int(np.argmax(column))

        return parent

    def _parse(self, tokens: List[Token]) -> ParseGraph:
        # ROOT не может быть зависимым: столбец 0 не заполняется
        score = self.model.build_matrix(tokens, root_as_dependent=False)
        parent = self.select_heads(score)

        arcs = [Arc(head=parent[j], dependent=j) for j in range(1, len(tokens) + 1)]
        weights = [score[a.head, a.dependent] for a in arcs]
        return self.build_graph(tokens, arcs, weights)


def parse_greedy_arborescence(tokens) -> ParseGraph:
    return GreedyHeadSelector().parse(tokens)
