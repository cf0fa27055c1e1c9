import argparse
import logging
from pathlib import Path

from rich.console import Console

from depsample.config import load_config, REPORTS_DIR
from depsample.corpus import build_corpus, load_conllu_corpus, load_text_corpus
from depsample.reporting import report_to_frame, render_report, save_reports
from depsample.validation import ValidationHarness

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

console = Console()


def load_corpus(args, settings):
    if args.corpus:
        corpus_path = Path(args.corpus)
        if corpus_path.suffix == ".conllu":
            return load_conllu_corpus(corpus_path, limit=args.limit)
        return load_text_corpus(corpus_path)

    logger.info(f"No corpus given, generating {settings.corpus_size} demo sentences")
    return build_corpus(settings.corpus_size, shuffle=settings.shuffle_corpus, seed=settings.seed)


def main():
    parser = argparse.ArgumentParser(description="Check whether parsing a random sample matches the full corpus")
    parser.add_argument("--config", default=None, help="YAML config (default: config/validation.yaml)")
    parser.add_argument("--algorithm", action="append", default=None,
                        help="projective | greedy | arcstandard (repeatable)")
    parser.add_argument("--fractions", type=float, nargs="+", default=None, help="Sample fractions, e.g. 0.2 0.5")
    parser.add_argument("--runs", type=int, default=None, help="Runs per sample fraction")
    parser.add_argument("--corpus", default=None, help=".conllu file or plain text (one sentence per line)")
    parser.add_argument("--limit", type=int, default=None, help="Max sentences to read from a .conllu corpus")
    parser.add_argument("--size", type=int, default=None, help="Size of the generated demo corpus")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-timing", action="store_true", help="Skip timing trials")
    parser.add_argument("--output", default=str(REPORTS_DIR / "validation_report.json"))
    parser.add_argument("--csv", default=None, help="Optional CSV summary path")

    args = parser.parse_args()

    settings = load_config(args.config)
    overrides = {
        "algorithms": args.algorithm,
        "sample_fractions": args.fractions,
        "runs_per_fraction": args.runs,
        "corpus_size": args.size,
        "seed": args.seed,
    }
    updates = {k: v for k, v in overrides.items() if v is not None}
    if args.no_timing:
        updates["measure_timing"] = False
    settings = settings.model_validate({**settings.model_dump(), **updates})

    corpus = load_corpus(args, settings)
    console.print(f"[bold green]Corpus: {len(corpus)} sentences[/]")

    reports = []
    for algorithm in settings.algorithms:
        harness = ValidationHarness(
            algorithm,
            runs_per_fraction=settings.runs_per_fraction,
            acceptance_threshold=settings.acceptance_threshold,
            significance_level=settings.significance_level,
            measure_timing=settings.measure_timing,
            seed=settings.seed,
            progress=True,
        )
        report = harness.run(corpus, settings.sample_fractions)
        render_report(report, console)
        reports.append(report)

    save_reports(reports, args.output)
    console.print(f"\n💾 Report saved to {args.output}")

    if args.csv:
        df = report_to_frame(reports)
        Path(args.csv).parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(args.csv, index=False)
        console.print(f"💾 Summary saved to {args.csv}")


if __name__ == "__main__":
    main()
