# depsample/core/interfaces.py
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Sequence

from .data_structures import Token, Arc, GraphNode, GraphEdge, ParseGraph, ROOT_ID, ROOT_POS


def coerce_tokens(tokens: Optional[Iterable[Any]]) -> List[Token]:
    """
    Приводит вход (Token или dict с ключами text/pos) к списку Token.
    None и пустой вход дают пустой список.
    """
    if not tokens:
        return []

    result = []
    for i, t in enumerate(tokens):
        if isinstance(t, Token):
            result.append(t)
        else:
            data = dict(t)
            data.setdefault("idx", i)
            result.append(Token(**data))
    return result


class BaseDependencyParser(ABC):
    """
    Общий каркас эвристических парсеров.
    Индекс 0 зарезервирован за синтетическим ROOT, токены занимают 1..n.
    """

    name: str = "base"

    def parse(self, tokens: Optional[Iterable[Any]]) -> ParseGraph:
        words = coerce_tokens(tokens)
        if not words:
            return ParseGraph()
        return self._parse(words)

    @abstractmethod
    def _parse(self, tokens: List[Token]) -> ParseGraph:
        """
        Принимает непустой список токенов.
        Возвращает граф с n+1 вершинами и n дугами.
        """
        pass

    @staticmethod
    def node_id(tokens: Sequence[Token], index: int) -> str:
        """index в пространстве с ROOT (0 = ROOT, 1..n = токены)."""
        if index == 0:
            return ROOT_ID
        return f"{tokens[index - 1].text}_{index - 1}"

    def build_graph(self, tokens: Sequence[Token], arcs: Iterable[Arc], weights: Iterable[float]) -> ParseGraph:
        nodes = [GraphNode(id=ROOT_ID, label=ROOT_ID, pos=ROOT_POS, weight=2.0)]
        nodes.extend(
            GraphNode(id=f"{t.text}_{i}", label=t.text, pos=t.pos, weight=1.0)
            for i, t in enumerate(tokens)
        )

        edges = [
            GraphEdge(
                source=self.node_id(tokens, arc.head),
                target=self.node_id(tokens, arc.dependent),
                weight=float(w),
            )
            for arc, w in zip(arcs, weights)
        ]
        return ParseGraph(nodes=nodes, edges=edges)
