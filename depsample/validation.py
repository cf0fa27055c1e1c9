import time
import math
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple, Union

import psutil
from pydantic import BaseModel, Field
from tqdm import tqdm

from depsample.config import ACCEPTANCE_THRESHOLD, SIGNIFICANCE_LEVEL, DEFAULT_RUNS_PER_FRACTION
from depsample.core.data_structures import Token, GraphEdge, ParseGraph
from depsample.evaluation.similarity import SimilarityCalculator
from depsample.evaluation.statistics import TTestResult, mean, std_dev, welch_t_test
from depsample.parsers import ParserAlgorithm, get_parser, resolve_algorithm
from depsample.profiler import GraphProfiler
from depsample.sampler import RandomSubsetSampler

logger = logging.getLogger(__name__)

VERDICT_VIABLE = "viable"
VERDICT_PARTIAL = "partial"
VERDICT_NOT_RECOMMENDED = "not_recommended"


@dataclass
class SampleTrial:
    """Один прогон: время, память и (для выборок) сходство с полным корпусом."""
    fraction: float
    run: int
    sample_size: int
    duration_ms: float
    memory_delta_mb: float
    jaccard: float = math.nan
    attachment: float = math.nan
    reproducible: bool = True


class TimingSummary(BaseModel):
    timings_ms: List[float]
    mean_ms: float
    std_ms: float
    memory_mean_mb: float
    memory_std_mb: float

    @classmethod
    def from_trials(cls, trials: Sequence[SampleTrial]) -> "TimingSummary":
        timings = [t.duration_ms for t in trials]
        memories = [t.memory_delta_mb for t in trials]
        return cls(
            timings_ms=timings,
            mean_ms=mean(timings),
            std_ms=std_dev(timings),
            memory_mean_mb=mean(memories),
            memory_std_mb=std_dev(memories),
        )


class FractionReport(BaseModel):
    fraction: float
    sample_size: int
    jaccard_mean: float
    jaccard_std: float
    attachment_mean: float
    attachment_std: float
    acceptable: bool
    reproducible: bool
    timing: Optional[TimingSummary] = None
    t_test: Optional[TTestResult] = None
    # None, если время не измерялось; False также для NaN p-value
    timing_comparable: Optional[bool] = None


class ValidationReport(BaseModel):
    algorithm: str
    corpus_size: int
    full_edge_count: int
    runs_per_fraction: int
    acceptance_threshold: float
    significance_level: float
    structure: Dict[str, int] = Field(default_factory=dict)
    full_timing: Optional[TimingSummary] = None
    fractions: List[FractionReport] = Field(default_factory=list)
    verdict: str = VERDICT_NOT_RECOMMENDED
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def concat_edges(graphs: Sequence[ParseGraph]) -> List[GraphEdge]:
    edges = []
    for graph in graphs:
        edges.extend(graph.edges)
    return edges


def overall_verdict(fractions: Sequence[FractionReport]) -> str:
    if fractions and all(f.acceptable for f in fractions):
        return VERDICT_VIABLE
    if any(f.acceptable for f in fractions):
        return VERDICT_PARTIAL
    return VERDICT_NOT_RECOMMENDED


class ValidationHarness:
    """
    Отвечает на вопрос "можно ли парсить случайную подвыборку вместо полного корпуса?".

    1. Полный корпус разбирается один раз - эталон для сходства.
    2. runs_per_fraction замеров времени на полном корпусе.
    3. Для каждой доли: runs_per_fraction случайных выборок без возвращения,
       каждая разбирается с замером времени и сравнивается с эталоном.
    Все замеры идут строго последовательно, чтобы не искажать время.
    """

    def __init__(
            self,
            algorithm: Union[str, ParserAlgorithm],
            runs_per_fraction: int = DEFAULT_RUNS_PER_FRACTION,
            acceptance_threshold: float = ACCEPTANCE_THRESHOLD,
            significance_level: float = SIGNIFICANCE_LEVEL,
            measure_timing: bool = True,
            seed: Optional[int] = None,
            sampler: Optional[RandomSubsetSampler] = None,
            progress: bool = False
    ):
        if runs_per_fraction < 1:
            raise ValueError(f"runs_per_fraction must be >= 1, got {runs_per_fraction}")

        self.algorithm = resolve_algorithm(algorithm)
        self.parser = get_parser(self.algorithm)
        self.runs = runs_per_fraction
        self.acceptance_threshold = acceptance_threshold
        self.significance_level = significance_level
        self.measure_timing = measure_timing
        self.sampler = sampler or RandomSubsetSampler(seed=seed)
        self.similarity = SimilarityCalculator()
        self.profiler = GraphProfiler()
        self.progress = progress
        self._process = psutil.Process()

    def parse_corpus(self, sentences: Sequence[Sequence[Token]]) -> List[ParseGraph]:
        return [self.parser.parse(tokens) for tokens in sentences]

    def timed_pass(self, sentences: Sequence[Sequence[Token]]) -> Tuple[List[ParseGraph], float, float]:
        """
        Разбор с замером: суммарное время разбора (мс) и прирост RSS за проход (МБ).
        """
        rss_before = self._process.memory_info().rss

        graphs = []
        total = 0.0
        for tokens in sentences:
            start = time.perf_counter()
            graphs.append(self.parser.parse(tokens))
            total += time.perf_counter() - start

        rss_after = self._process.memory_info().rss
        return graphs, total * 1000.0, (rss_after - rss_before) / 1024 / 1024

    def run(self, sentences: Sequence[Sequence[Token]], sample_fractions: Sequence[float]) -> ValidationReport:
        for fraction in sample_fractions:
            if not 0.0 < fraction <= 1.0:
                raise ValueError(f"Sample fraction must be in (0, 1], got {fraction}")

        name = self.algorithm.value
        population = len(sentences)
        if population == 0:
            logger.warning(f"[{name}] Empty corpus, every comparison is trivially equal")

        # 1. Эталон
        logger.info(f"[{name}] Parsing full corpus of {population} sentences...")
        full_graphs = self.parse_corpus(sentences)
        full_edges = concat_edges(full_graphs)
        full_signatures = [g.signature() for g in full_graphs]
        structure = self.profiler.profile_corpus(full_graphs)

        if structure["cyclic"]:
            logger.info(f"[{name}] {structure['cyclic']} of {structure['sentences']} parses contain cycles")

        # 2. Замеры на полном корпусе
        full_trials = []
        if self.measure_timing:
            for run in tqdm(range(1, self.runs + 1), desc=f"{name} full", disable=not self.progress):
                _, duration, memory = self.timed_pass(sentences)
                full_trials.append(SampleTrial(1.0, run, population, duration, memory))
        full_timing = TimingSummary.from_trials(full_trials) if full_trials else None

        # 3. Выборки
        fraction_reports = []
        for fraction in sample_fractions:
            count = self.sampler.sample_count(population, fraction)
            trials = []

            for run in tqdm(range(1, self.runs + 1), desc=f"{name} {fraction:.0%}", disable=not self.progress):
                indices = self.sampler.draw_indices(population, count)
                sample = [sentences[i] for i in indices]

                graphs, duration, memory = self.timed_pass(sample)
                sample_edges = concat_edges(graphs)

                trials.append(SampleTrial(
                    fraction=fraction,
                    run=run,
                    sample_size=len(sample),
                    duration_ms=duration,
                    memory_delta_mb=memory,
                    jaccard=self.similarity.jaccard(full_edges, sample_edges),
                    attachment=self.similarity.attachment_score(full_edges, sample_edges),
                    reproducible=all(
                        g.signature() == full_signatures[i] for i, g in zip(indices, graphs)
                    ),
                ))

            fraction_reports.append(self._summarize(fraction, count, trials, full_trials))
            report = fraction_reports[-1]
            logger.info(
                f"[{name}] {fraction:.0%}: jaccard={report.jaccard_mean:.4f} "
                f"attachment={report.attachment_mean:.4f} acceptable={report.acceptable}"
            )

        return ValidationReport(
            algorithm=name,
            corpus_size=population,
            full_edge_count=len(full_edges),
            runs_per_fraction=self.runs,
            acceptance_threshold=self.acceptance_threshold,
            significance_level=self.significance_level,
            structure=structure,
            full_timing=full_timing,
            fractions=fraction_reports,
            verdict=overall_verdict(fraction_reports),
        )

    def _summarize(
            self,
            fraction: float,
            count: int,
            trials: List[SampleTrial],
            full_trials: List[SampleTrial]
    ) -> FractionReport:
        jaccards = [t.jaccard for t in trials]
        attachments = [t.attachment for t in trials]
        jaccard_mean = mean(jaccards)
        attachment_mean = mean(attachments)

        timing = None
        t_test = None
        comparable = None
        if self.measure_timing:
            timing = TimingSummary.from_trials(trials)
            t_test = welch_t_test([t.duration_ms for t in full_trials], timing.timings_ms)
            # NaN >= x всегда False
            comparable = bool(t_test.p_value >= self.significance_level)

        return FractionReport(
            fraction=fraction,
            sample_size=count,
            jaccard_mean=jaccard_mean,
            jaccard_std=std_dev(jaccards),
            attachment_mean=attachment_mean,
            attachment_std=std_dev(attachments),
            acceptable=bool(
                jaccard_mean >= self.acceptance_threshold or attachment_mean >= self.acceptance_threshold
            ),
            reproducible=all(t.reproducible for t in trials),
            timing=timing,
            t_test=t_test,
            timing_comparable=comparable,
        )


def run_validation(
        full_corpus_sentences: Sequence[Sequence[Token]],
        sample_fractions: Sequence[float],
        runs_per_fraction: int,
        algorithm: Union[str, ParserAlgorithm],
        **kwargs
) -> ValidationReport:
    harness = ValidationHarness(algorithm, runs_per_fraction=runs_per_fraction, **kwargs)
    return harness.run(full_corpus_sentences, sample_fractions)
