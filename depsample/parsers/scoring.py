import math
from typing import Dict, Mapping, Optional, Sequence

import numpy as np

from depsample.config import DEFAULT_AFFINITY, DISTANCE_DECAY
from depsample.core.data_structures import Token, ROOT_POS

# Лингвистические предпочтения: AFFINITY[head][dependent]
AFFINITY: Dict[str, Dict[str, float]] = {
    # Глаголы обычно вершины
    "Verb": {"Noun": 0.9, "Adjective": 0.7, "Adverb": 0.8, "Determiner": 0.6, "Preposition": 0.7},
    # Существительные - вершины именных групп
    "Noun": {"Adjective": 0.8, "Determiner": 0.9, "Noun": 0.6, "Preposition": 0.7},
    "Adjective": {"Adverb": 0.7, "Noun": 0.3},
    # Предлоги берут именную группу
    "Preposition": {"Noun": 0.9, "Determiner": 0.5},
}

HEAD_DEFAULTS: Dict[str, float] = {head: DEFAULT_AFFINITY for head in AFFINITY}


class ScoringModel:
    """
    Оценка дуги head -> dependent по паре POS и расстоянию.
    Без состояния: одна и та же тройка аргументов всегда даёт один результат.
    """

    def __init__(
            self,
            affinity: Optional[Mapping[str, Mapping[str, float]]] = None,
            head_defaults: Optional[Mapping[str, float]] = None,
            default: float = DEFAULT_AFFINITY,
            decay: float = DISTANCE_DECAY
    ):
        self.affinity = affinity if affinity is not None else AFFINITY
        self.head_defaults = head_defaults if head_defaults is not None else HEAD_DEFAULTS
        self.default = default
        self.decay = decay

    def base_score(self, head_pos: str, dep_pos: str) -> float:
        head_prefs = self.affinity.get(head_pos)
        if head_prefs is None:
            return self.default

        value = head_prefs.get(dep_pos)
        if value is None:
            return self.head_defaults.get(head_pos, self.default)
        return value

    def score(self, head_pos: str, dep_pos: str, distance: int) -> float:
        # Штраф за длину дуги (предпочтение локальных зависимостей)
        return self.base_score(head_pos, dep_pos) * math.exp(-distance / self.decay)

    def build_matrix(self, tokens: Sequence[Token], root_as_dependent: bool = True) -> np.ndarray:
        """
        Матрица (n+1)x(n+1): score[i][j] - оценка i как вершины для j.
        ROOT на позиции 0, диагональ нулевая. Создаётся заново на каждый вызов парсера.
        При root_as_dependent=False столбец 0 остаётся нулевым.
        """
        tags = [ROOT_POS] + [t.pos for t in tokens]
        size = len(tags)
        matrix = np.zeros((size, size), dtype=float)

        first_dependent = 0 if root_as_dependent else 1
        for i in range(size):
            for j in range(first_dependent, size):
                if i != j:
                    matrix[i, j] = self.score(tags[i], tags[j], abs(i - j))

        matrix.setflags(write=False)
        return matrix


DEFAULT_MODEL = ScoringModel()


def score_dependency(head_pos: str, dep_pos: str, distance: int) -> float:
    return DEFAULT_MODEL.score(head_pos, dep_pos, distance)
