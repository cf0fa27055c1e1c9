import argparse
import json
import logging

from rich.console import Console
from rich.table import Table

from depsample.corpus import RuleBasedTagger
from depsample.parsers import get_parser
from depsample.profiler import GraphProfiler

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

console = Console()


def main():
    parser = argparse.ArgumentParser(description="Parse one sentence with a heuristic dependency parser")
    parser.add_argument("sentence", help="Whitespace-tokenised sentence")
    parser.add_argument("--algorithm", default="projective", help="projective | greedy | arcstandard")
    parser.add_argument("--json", action="store_true", help="Print the graph as JSON")
    args = parser.parse_args()

    tokens = RuleBasedTagger().tokenize_and_tag(args.sentence)
    graph = get_parser(args.algorithm).parse(tokens)

    if args.json:
        print(json.dumps(graph.model_dump(), ensure_ascii=False, indent=2))
        return

    table = Table(title=f"{args.algorithm}: {args.sentence}")
    table.add_column("Head")
    table.add_column("Dependent")
    table.add_column("POS")
    table.add_column("Weight", justify="right")

    pos_by_id = {n.id: n.pos for n in graph.nodes}
    for edge in graph.edges:
        table.add_row(edge.source, edge.target, pos_by_id.get(edge.target, "_"), f"{edge.weight:.3f}")

    console.print(table)
    profile = GraphProfiler().profile_graph(graph)
    console.print(f"cycle={profile['has_cycle']} non_projective={profile['non_projectivity']} "
                  f"depth={profile['tree_depth']}")


if __name__ == "__main__":
    main()
