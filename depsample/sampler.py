import math
import random
import logging
from typing import List, Optional, Sequence, TypeVar

from depsample.config import SAMPLING_ATTEMPT_FACTOR

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSubsetSampler:
    """
    Равномерная выборка индексов без возвращения.

    Индексы тянутся случайно с отбрасыванием повторов. Число бросков ограничено
    (attempt_factor * population), после чего недостающие индексы добираются из ещё
    не выбранных. Запрос размером >= population сразу возвращает всю совокупность.
    """

    def __init__(self, seed: Optional[int] = None, attempt_factor: int = SAMPLING_ATTEMPT_FACTOR):
        self.rng = random.Random(seed)
        self.attempt_factor = attempt_factor

    @staticmethod
    def sample_count(population: int, fraction: float) -> int:
        return int(math.floor(population * fraction))

    def draw_indices(self, population: int, count: int) -> List[int]:
        if count <= 0 or population <= 0:
            return []

        if count >= population:
            logger.info(f"Requested {count} of {population} items, using the full population")
            return list(range(population))

        # dict сохраняет порядок вставки
        drawn = {}
        max_attempts = self.attempt_factor * population
        attempts = 0

        while len(drawn) < count:
            if attempts >= max_attempts:
                remaining = [i for i in range(population) if i not in drawn]
                missing = count - len(drawn)
                logger.warning(
                    f"Rejection sampling hit {max_attempts} attempts with {len(drawn)}/{count} "
                    f"unique indices, filling {missing} from the remainder"
                )
                for i in self.rng.sample(remaining, missing):
                    drawn[i] = None
                break

            drawn[self.rng.randrange(population)] = None
            attempts += 1

        return list(drawn)

    def sample(self, items: Sequence[T], fraction: float) -> List[T]:
        if not 0.0 < fraction <= 1.0:
            raise ValueError(f"Sample fraction must be in (0, 1], got {fraction}")

        count = self.sample_count(len(items), fraction)
        return [items[i] for i in self.draw_indices(len(items), count)]
