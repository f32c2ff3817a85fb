from .core import (
    ScoringParams,
    ScoringResult,
    ScoreStatus,
    filter_zone,
    relative_richness,
    protection_cost,
    priority_score,
    assign_deciles,
    score_cells,
)

__all__ = [
    "ScoringParams",
    "ScoringResult",
    "ScoreStatus",
    "filter_zone",
    "relative_richness",
    "protection_cost",
    "priority_score",
    "assign_deciles",
    "score_cells",
]
