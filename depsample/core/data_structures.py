# depsample/core/data_structures.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List

ROOT_ID = "ROOT"
ROOT_POS = "ROOT"


class Token(BaseModel):
    """
    Единица анализа, которую отдаёт внешний теггер.
    После создания не изменяется.
    """
    model_config = ConfigDict(frozen=True)

    text: str
    pos: str  # Упрощённая категория: Noun, Verb, Determiner...
    idx: int = Field(default=0, ge=0)  # 0-based позиция в предложении


class Arc(BaseModel):
    model_config = ConfigDict(frozen=True)

    head: int  # 0 для ROOT
    dependent: int


class GraphNode(BaseModel):
    id: str
    label: str
    pos: str
    weight: float = 1.0


class GraphEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str  # id вершины-хозяина
    target: str  # id зависимой вершины
    weight: float = 1.0

    @property
    def pair(self):
        return self.source, self.target


class ParseGraph(BaseModel):
    """
    Внешний артефакт разбора: вершины (ROOT + токены) и дуги head -> dependent.
    """
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def signature(self) -> str:
        """
        Отсортированное строковое представление дуг для сравнения результатов прогонов.
        """
        if not self.edges:
            return ""
        return "|".join(sorted(f"{e.source}->{e.target}" for e in self.edges))
