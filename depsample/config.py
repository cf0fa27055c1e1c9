# depsample/config.py
import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# Определение базовых путей относительно корня проекта
BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = BASE_DIR / "config"
REPORTS_DIR = BASE_DIR / "reports"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "validation.yaml"

# Доли выборки и число прогонов на каждую долю
DEFAULT_SAMPLE_FRACTIONS = [0.2, 0.4, 0.6, 0.8]
DEFAULT_RUNS_PER_FRACTION = 10
DEFAULT_CORPUS_SIZE = 1000

# Порог приемлемости выборки: Jaccard >= 0.9 ИЛИ attachment >= 0.9
ACCEPTANCE_THRESHOLD = 0.9
# Уровень значимости для сравнения времени работы (p >= 0.05 -> "похоже")
SIGNIFICANCE_LEVEL = 0.05

# Параметры модели оценки дуг
DEFAULT_AFFINITY = 0.5
DISTANCE_DECAY = 5.0
# Порог уверенности для переходов LEFT-ARC / RIGHT-ARC
TRANSITION_THRESHOLD = 0.3

# Ограничение на число попыток при выборке без возвращения:
# не более SAMPLING_ATTEMPT_FACTOR * population случайных бросков
SAMPLING_ATTEMPT_FACTOR = 20


class ValidationSettings(BaseModel):
    """
    Настройки прогона валидации.
    Читаются из config/validation.yaml, флаги CLI перекрывают значения из файла.
    """
    algorithms: List[str] = Field(default_factory=lambda: ["projective", "greedy", "arcstandard"])
    sample_fractions: List[float] = Field(default_factory=lambda: list(DEFAULT_SAMPLE_FRACTIONS))
    runs_per_fraction: int = Field(default=DEFAULT_RUNS_PER_FRACTION, ge=1)
    corpus_size: int = Field(default=DEFAULT_CORPUS_SIZE, ge=1)
    shuffle_corpus: bool = False
    seed: Optional[int] = None
    acceptance_threshold: float = Field(default=ACCEPTANCE_THRESHOLD, gt=0.0, le=1.0)
    significance_level: float = Field(default=SIGNIFICANCE_LEVEL, gt=0.0, lt=1.0)
    measure_timing: bool = True

    @field_validator("sample_fractions")
    @classmethod
    def check_fractions(cls, fractions: List[float]) -> List[float]:
        for fraction in fractions:
            if not 0.0 < fraction <= 1.0:
                raise ValueError(f"Sample fraction must be in (0, 1], got {fraction}")
        return fractions


def load_config(path: Union[str, Path, None] = None) -> ValidationSettings:
    """
    Загружает YAML-конфиг. Если файла нет, возвращает настройки по умолчанию.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        if path:
            raise FileNotFoundError(f"Config file {config_path} not found")
        logger.info(f"No config at {config_path}, using defaults.")
        return ValidationSettings()

    with open(config_path, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}

    section = raw.get("validation", raw) if isinstance(raw, dict) else raw
    if not isinstance(section, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(section).__name__}")

    return ValidationSettings(**section)
