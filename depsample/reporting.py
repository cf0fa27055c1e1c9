import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd
from rich.console import Console
from rich.table import Table

from depsample.validation import ValidationReport

logger = logging.getLogger(__name__)


def report_to_frame(reports: Iterable[ValidationReport]) -> pd.DataFrame:
    """
    Плоская таблица: одна строка на пару (алгоритм, доля выборки).
    """
    rows = []
    for report in reports:
        for fr in report.fractions:
            rows.append({
                "algorithm": report.algorithm,
                "fraction": fr.fraction,
                "sample_size": fr.sample_size,
                "jaccard": fr.jaccard_mean,
                "attachment": fr.attachment_mean,
                "acceptable": fr.acceptable,
                "reproducible": fr.reproducible,
                "avg_time_ms": fr.timing.mean_ms if fr.timing else None,
                "t_statistic": fr.t_test.t_statistic if fr.t_test else None,
                "p_value": fr.t_test.p_value if fr.t_test else None,
                "timing_comparable": fr.timing_comparable,
            })
    return pd.DataFrame(rows)


def render_report(report: ValidationReport, console: Console) -> None:
    table = Table(title=f"{report.algorithm} ({report.corpus_size} sentences, {report.full_edge_count} edges)")
    table.add_column("Sample%", justify="right")
    table.add_column("Jaccard", justify="right")
    table.add_column("Attachment", justify="right")
    table.add_column("Acceptable?")
    table.add_column("Avg time (ms)", justify="right")
    table.add_column("p-value", justify="right")
    table.add_column("Similar time?")

    for fr in report.fractions:
        avg_time = f"{fr.timing.mean_ms:.2f}" if fr.timing else "-"
        p_value = f"{fr.t_test.p_value:.4f}" if fr.t_test else "-"
        if fr.timing_comparable is None:
            similar = "-"
        else:
            similar = "[green]Yes[/]" if fr.timing_comparable else "[red]No[/]"

        table.add_row(
            f"{fr.fraction * 100:.0f}%",
            f"{fr.jaccard_mean * 100:.1f}%",
            f"{fr.attachment_mean * 100:.1f}%",
            "[green]Yes[/]" if fr.acceptable else "[red]No[/]",
            avg_time,
            p_value,
            similar,
        )

    console.print(table)

    structure = report.structure
    if structure:
        console.print(
            f"Parses with cycles: {structure.get('cyclic', 0)}/{structure.get('sentences', 0)}, "
            f"non-projective: {structure.get('non_projective', 0)}"
        )
    console.print(f"Verdict: [bold]{report.verdict}[/]")


def save_reports(reports: List[ValidationReport], path: Union[str, Path]) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # model_dump_json пишет NaN как null
    payload = [json.loads(r.model_dump_json()) for r in reports]
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    logger.info(f"Saved {len(reports)} validation reports to {output_path}")
    return output_path
