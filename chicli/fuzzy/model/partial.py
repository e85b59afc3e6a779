from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from joblib import Parallel, delayed

from .data import Data
from .knowledge import DataBase
from .learner import BuildOutput, ChiConfig, ClassCosts, learn
from .rulebase import RuleBase, merge
from ..core.types import ConfigurationError, Float

log = logging.getLogger(__name__)

COST_POLICIES = ("local", "global")


@dataclass
class ShardStats:
    index: int
    n_examples: int
    n_rules: int
    positive_class: int
    positive_class_cost: Float


@dataclass
class BuildStats:
    shards: List[ShardStats] = field(default_factory=list)
    rules_before_merge: int = 0
    rules_after_merge: int = 0
    seconds: float = 0.0

    @property
    def duplicates(self) -> int:
        return self.rules_before_merge - self.rules_after_merge

    def elapsed(self) -> str:
        return elapsed_time(self.seconds)


def elapsed_time(seconds: float) -> str:
    """'1h 2m 3s 45' (godziny, minuty, sekundy, milisekundy)."""
    millis = int(round(seconds * 1000))
    hours, millis = divmod(millis, 3600 * 1000)
    minutes, millis = divmod(millis, 60 * 1000)
    secs, millis = divmod(millis, 1000)
    return f"{hours}h {minutes}m {secs}s {millis}"


def _build_shard(index: int, shard: Data, database: DataBase, config: ChiConfig,
                 costs: Optional[ClassCosts], with_predictions: bool) -> BuildOutput:
    if shard.is_empty():
        raise ConfigurationError(f"Shard {index} has no examples")
    return learn(shard, database, config, costs=costs, with_predictions=with_predictions)


class PartialBuilder:
    """
    Budowa częściowa (w kształcie map/reduce):
      map    - każdy shard uczy własną bazę reguł na wspólnej DataBase
      reduce - bazy shardów scalane w kolejności shardów, pierwszy antecedent wygrywa

    Kolejność shardów jest częścią wejścia: inna kolejność może zachować wagę
    innego duplikatu.
    """

    def __init__(self, config: ChiConfig, n_shards: int = 1, n_jobs: int = 1,
                 cost_policy: str = "local", with_predictions: bool = False, backend: str = "loky"):
        if cost_policy not in COST_POLICIES:
            raise ConfigurationError(f"cost policy must be one of {COST_POLICIES} (got '{cost_policy}')")
        if n_shards < 1:
            raise ConfigurationError(f"Number of shards must be >= 1 (got {n_shards})")
        self.config = config
        self.n_shards = n_shards
        self.n_jobs = n_jobs
        self.cost_policy = cost_policy
        self.with_predictions = with_predictions
        self.backend = backend

    def database_for(self, data: Data) -> DataBase:
        # partycje z deskryptora, wspólne dla wszystkich shardów
        return DataBase.from_dataset(data.dataset, self.config.n_labels)

    def build_shards(self, shards: Sequence[Data], database: DataBase,
                     costs: Optional[ClassCosts] = None) -> List[BuildOutput]:
        """Jedna baza reguł na shard; wyniki wracają w kolejności shardów."""
        log.info("ChiCS: building %d shard(s) with n_jobs=%d", len(shards), self.n_jobs)
        return Parallel(n_jobs=self.n_jobs, backend=self.backend)(
            delayed(_build_shard)(i, shard, database, self.config, costs, self.with_predictions)
            for i, shard in enumerate(shards)
        )

    def build(self, data: Data, database: Optional[DataBase] = None) -> Tuple[RuleBase, BuildStats, List[BuildOutput]]:
        t0 = time.perf_counter()
        if database is None:
            database = self.database_for(data)
        costs = ClassCosts.from_data(data) if self.cost_policy == "global" else None
        if costs is not None:
            log.info("ChiCS: global costs: positive class %d, cost %.6g",
                     costs.positive_class, costs.positive_class_cost)

        shards = data.shards(self.n_shards)
        outputs = self.build_shards(shards, database, costs)
        stats = BuildStats()
        for i, (shard, out) in enumerate(zip(shards, outputs)):
            rb = out.rule_base
            stats.shards.append(ShardStats(i, len(shard), len(rb), rb.positive_class, rb.positive_class_cost))
            stats.rules_before_merge += len(rb)

        rule_base = merge([out.rule_base for out in outputs])
        stats.rules_after_merge = len(rule_base)
        stats.seconds = time.perf_counter() - t0
        log.info("ChiCS: Build Time: %s", stats.elapsed())
        return rule_base, stats, outputs
