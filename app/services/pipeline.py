"""
Store-neutral description of a grouped aggregation: an ordered tuple of stages
(match -> group -> sort -> limit) that app.repos.job_repo.aggregate compiles
into a single GROUP BY query.
"""
from dataclasses import dataclass
from enum import Enum


class GroupKey(str, Enum):
    STATUS = "status"
    YEAR = "year"
    MONTH = "month"


@dataclass(frozen=True)
class MatchStage:
    created_by: str


@dataclass(frozen=True)
class GroupStage:
    keys: tuple[GroupKey, ...]


@dataclass(frozen=True)
class SortField:
    key: GroupKey
    descending: bool = False


@dataclass(frozen=True)
class SortStage:
    fields: tuple[SortField, ...]


@dataclass(frozen=True)
class LimitStage:
    count: int


Stage = MatchStage | GroupStage | SortStage | LimitStage


@dataclass(frozen=True)
class Pipeline:
    stages: tuple[Stage, ...]

    def __post_init__(self):
        groups = [s for s in self.stages if isinstance(s, GroupStage)]
        if len(groups) != 1:
            raise ValueError("Pipeline needs exactly one group stage")
        group_at = self.stages.index(groups[0])
        for i, stage in enumerate(self.stages):
            if isinstance(stage, MatchStage) and i > group_at:
                raise ValueError("Match stages must come before the group stage")
            if isinstance(stage, (SortStage, LimitStage)) and i < group_at:
                raise ValueError("Sort and limit stages must come after the group stage")
            if isinstance(stage, SortStage):
                unknown = [f.key for f in stage.fields if f.key not in groups[0].keys]
                if unknown:
                    raise ValueError(f"Cannot sort on ungrouped keys: {unknown}")
            if isinstance(stage, LimitStage) and stage.count <= 0:
                raise ValueError("Limit must be positive")

    @property
    def group(self) -> GroupStage:
        return next(s for s in self.stages if isinstance(s, GroupStage))
