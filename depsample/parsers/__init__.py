from enum import Enum
from typing import Union

from .scoring import ScoringModel, score_dependency
from .projective import ProjectiveHeadSelector, parse_projective, arcs_cross
from .greedy import GreedyHeadSelector, parse_greedy_arborescence
from .arc_standard import ArcStandardTransitionParser, parse_arc_standard


class ParserAlgorithm(str, Enum):
    PROJECTIVE = "projective"
    GREEDY = "greedy"
    ARC_STANDARD = "arcstandard"


PARSERS = {
    ParserAlgorithm.PROJECTIVE: ProjectiveHeadSelector,
    ParserAlgorithm.GREEDY: GreedyHeadSelector,
    ParserAlgorithm.ARC_STANDARD: ArcStandardTransitionParser,
}

# Альтернативные имена: eisner, chu-liu, arc-standard
ALIASES = {
    "eisner": ParserAlgorithm.PROJECTIVE,
    "chu-liu": ParserAlgorithm.GREEDY,
    "chuliu": ParserAlgorithm.GREEDY,
    "arc-standard": ParserAlgorithm.ARC_STANDARD,
}


def resolve_algorithm(algorithm: Union[str, ParserAlgorithm]) -> ParserAlgorithm:
    if isinstance(algorithm, ParserAlgorithm):
        return algorithm
    key = str(algorithm).strip().lower()
    if key in ALIASES:
        return ALIASES[key]
    try:
        return ParserAlgorithm(key)
    except ValueError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None


def get_parser(algorithm: Union[str, ParserAlgorithm], model: ScoringModel = None):
    return PARSERS[resolve_algorithm(algorithm)](model=model)


__all__ = [
    "ParserAlgorithm",
    "ScoringModel",
    "score_dependency",
    "ProjectiveHeadSelector",
    "GreedyHeadSelector",
    "ArcStandardTransitionParser",
    "parse_projective",
    "parse_greedy_arborescence",
    "parse_arc_standard",
    "arcs_cross",
    "resolve_algorithm",
    "get_parser",
]
