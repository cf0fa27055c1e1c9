import logging
from dataclasses import dataclass, field
from typing import List, Optional

from depsample.config import TRANSITION_THRESHOLD
from depsample.core.data_structures import Token, Arc, ParseGraph, ROOT_POS
from depsample.core.interfaces import BaseDependencyParser
from depsample.parsers.scoring import ScoringModel, DEFAULT_MODEL

logger = logging.getLogger(__name__)

SHIFT = "SHIFT"
LEFT_ARC = "LEFT-ARC"
RIGHT_ARC = "RIGHT-ARC"


@dataclass
class TransitionTrace:
    arcs: List[Arc] = field(default_factory=list)
    transitions: List[str] = field(default_factory=list)
    forced: int = 0  # Сколько дуг добавлено принудительно при пустом буфере
    buffer_left: int = 0


class ArcStandardTransitionParser(BaseDependencyParser):
    """
    Arc-standard система переходов (стек + буфер).

    Решение на каждом шаге:
      1. RIGHT-ARC, если right > left и right > threshold;
      2. LEFT-ARC, если left > threshold и second не ROOT;
      3. SHIFT, если буфер не пуст;
      4. иначе принудительная дуга в сторону большей оценки (ROOT всегда вершина).
    Порядок проверок влияет на результат и должен сохраняться.
    """

    name = "arcstandard"

    def __init__(self, model: Optional[ScoringModel] = None, threshold: float = TRANSITION_THRESHOLD):
        self.model = model or DEFAULT_MODEL
        self.threshold = threshold

    def derive(self, tokens: List[Token]) -> TransitionTrace:
        n = len(tokens)
        tags = [ROOT_POS] + [t.pos for t in tokens]

        stack = [0]  # ROOT на дне стека
        buffer = list(range(1, n + 1))
        buffer_pos = 0
        trace = TransitionTrace()

        while buffer_pos < n or len(stack) > 1:
            if len(stack) < 2:
                if buffer_pos < n:
                    stack.append(buffer[buffer_pos])
                    buffer_pos += 1
                    trace.transitions.append(SHIFT)
                    continue
                # Недостижимо при корректном цикле, но выходим без исключения
                logger.warning("Arc-standard reached an empty configuration, stopping")
                break

            top = stack[-1]
            second = stack[-2]
            distance = abs(top - second)

            left_score = self.model.score(tags[top], tags[second], distance)
            right_score = self.model.score(tags[second], tags[top], distance)

            if right_score > left_score and right_score > self.threshold:
                trace.arcs.append(Arc(head=second, dependent=top))
                stack.pop()
                trace.transitions.append(RIGHT_ARC)
            elif left_score > self.threshold and second != 0:
                trace.arcs.append(Arc(head=top, dependent=second))
                del stack[-2]
                trace.transitions.append(LEFT_ARC)
            elif buffer_pos < n:
                stack.append(buffer[buffer_pos])
                buffer_pos += 1
                trace.transitions.append(SHIFT)
            else:
                # Буфер пуст, ни один переход не прошёл порог: решаем принудительно
                trace.forced += 1
                if right_score >= left_score or second == 0:
                    trace.arcs.append(Arc(head=second, dependent=top))
                    stack.pop()
                    trace.transitions.append(RIGHT_ARC)
                else:
                    trace.arcs.append(Arc(head=top, dependent=second))
                    del stack[-2]
                    trace.transitions.append(LEFT_ARC)

        trace.buffer_left = n - buffer_pos
        return trace

    def _parse(self, tokens: List[Token]) -> ParseGraph:
        trace = self.derive(tokens)
        if len(trace.arcs) != len(tokens):
            logger.warning(f"Arc-standard produced {len(trace.arcs)} arcs for {len(tokens)} tokens")

        # Дуги переходной системы не взвешены
        weights = [1.0] * len(trace.arcs)
        return self.build_graph(tokens, trace.arcs, weights)


def parse_arc_standard(tokens) -> ParseGraph:
    return ArcStandardTransitionParser().parse(tokens)
