from .statistics import TTestResult, mean, std_dev, erf, normal_cdf, welch_t_test
from .similarity import SimilarityCalculator, jaccard, attachment_score

__all__ = [
    "TTestResult",
    "mean",
    "std_dev",
    "erf",
    "normal_cdf",
    "welch_t_test",
    "SimilarityCalculator",
    "jaccard",
    "attachment_score",
]
