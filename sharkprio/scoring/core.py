"""
Conservation priority scoring for grid cells.

Cells arrive as a DataFrame indexed by ``cell_id`` with one column per raster
layer. The score combines the joint probability of the target species, the
species richness relative to the richest cell in the zone and a quadratic
cost of protection driven by the distance to the nearest port:

    priority = p_silky * p_hammerhead * relative_richness**alpha / cost**beta
    cost     = a * distance_to_port**2 - b * distance_to_port + c

Missing values propagate as NaN. Nothing here raises for bad numbers; a zone
with no usable cells comes back with ``ScoreStatus.NO_DATA``.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Hashable, Optional, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

N_DECILES = 10
SPECIES_COLUMNS = ("p_silky", "p_hammerhead")
RICHNESS_COLUMN = "species_richness"
DISTANCE_COLUMN = "distance_to_port"
ZONE_COLUMN = "zone_id"


@dataclass(frozen=True)
class ScoringParams:
    """Exponents and cost coefficients of the priority formula."""

    alpha: float
    beta: float
    a: float
    b: float
    c: float


class ScoreStatus(StrEnum):
    OK = "ok"
    NO_DATA = "no_data"


@dataclass
class ScoringResult:
    cells: pd.DataFrame
    status: ScoreStatus
    max_richness: float

    @property
    def n_scored(self) -> int:
        return int(self.cells["priority"].notna().sum()) if "priority" in self.cells else 0


def filter_zone(
    cells: pd.DataFrame, target: Hashable, zone_column: str = ZONE_COLUMN
) -> pd.DataFrame:
    """Keep the cells whose zone equals ``target``."""
    if zone_column not in cells.columns:
        raise ValueError(f"Zone column '{zone_column}' not found in cells")
    return cells[cells[zone_column] == target]


def relative_richness(richness: pd.Series) -> pd.Series:
    """Scale richness by its maximum over the non-missing values.

    A maximum that is missing or not positive leaves every value missing.
    """
    max_richness = richness.max(skipna=True)
    if pd.isna(max_richness) or max_richness <= 0:
        return pd.Series(np.nan, index=richness.index, dtype="float64")
    return richness.astype("float64") / float(max_richness)


def protection_cost(distance, a: float, b: float, c: float):
    """Quadratic cost of protecting a cell at ``distance`` from port."""
    return a * distance**2 - b * distance + c


def priority_score(
    priority_spp: pd.Series,
    rel_richness: pd.Series,
    cost: pd.Series,
    alpha: float,
    beta: float,
) -> pd.Series:
    # Negative bases under fractional exponents and division by zero are
    # expected input; they end up as NaN rather than warnings.
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        score = (
            priority_spp.astype("float64")
            * np.power(rel_richness.astype("float64"), alpha)
            / np.power(cost.astype("float64"), beta)
        )
    # x**0 is 1 even for NaN, so missing operands are masked explicitly.
    missing = priority_spp.isna() | rel_richness.isna() | cost.isna()
    undefined = missing | (cost == 0) | ~np.isfinite(score)
    return score.mask(undefined)


def assign_deciles(priority: pd.Series, n_buckets: int = N_DECILES) -> pd.Series:
    """Rank defined priorities into equal-population buckets.

    Defined values are sorted ascending with a stable sort, so ties keep their
    input order. The cell at 0-based rank ``r`` out of ``n`` goes to bucket
    ``floor(n_buckets * r / n) + 1``; bucket sizes therefore differ by at most
    one. Missing priorities get no bucket.
    """
    deciles = pd.Series(pd.NA, index=priority.index, dtype="Int64")
    defined = priority.dropna()
    n = len(defined)
    if n == 0:
        return deciles
    order = np.argsort(defined.to_numpy(), kind="stable")
    ranks = np.empty(n, dtype=np.int64)
    ranks[order] = np.arange(n)
    buckets = (n_buckets * ranks) // n + 1
    deciles.loc[defined.index] = buckets
    return deciles


def _check_cells(cells: pd.DataFrame, species_columns: Sequence[str]) -> None:
    required = list(species_columns) + [RICHNESS_COLUMN, DISTANCE_COLUMN]
    missing = [col for col in required if col not in cells.columns]
    if missing:
        raise ValueError(f"Cells are missing required columns: {missing}")
    if not cells.index.is_unique:
        raise ValueError("Cell identifiers must be unique")


def score_cells(
    cells: pd.DataFrame,
    params: ScoringParams,
    target_zone: Optional[Hashable] = None,
    zone_column: str = ZONE_COLUMN,
    species_columns: Sequence[str] = SPECIES_COLUMNS,
) -> ScoringResult:
    """
    Score every cell of a zone and rank the scores into deciles.

    Args:
        cells: Cell table indexed by cell identifier.
        params: Exponents and cost coefficients.
        target_zone: If given, only cells with ``zone_column == target_zone`` are scored.
        zone_column: Name of the zone membership column.
        species_columns: Probability columns multiplied into ``priority_spp``.

    Returns:
        ScoringResult holding a new DataFrame with the input columns plus
        ``priority_spp``, ``relative_richness``, ``cost``, ``priority`` and ``decile``.

    Raises:
        ValueError: If required columns are missing or cell identifiers repeat.
    """
    _check_cells(cells, species_columns)

    if target_zone is not None:
        scored = filter_zone(cells, target_zone, zone_column).copy()
        logger.info("Filtered %d of %d cells to zone %s", len(scored), len(cells), target_zone)
    else:
        scored = cells.copy()

    # The richness maximum is a reduction over the whole filtered population
    # and has to exist before the per-cell pass.
    max_richness = scored[RICHNESS_COLUMN].max(skipna=True)
    max_richness = float(max_richness) if pd.notna(max_richness) else np.nan
    logger.debug("Maximum species richness in population: %s", max_richness)

    spp = scored[species_columns[0]].astype("float64")
    for col in species_columns[1:]:
        spp = spp * scored[col].astype("float64")
    scored["priority_spp"] = spp
    scored["relative_richness"] = relative_richness(scored[RICHNESS_COLUMN])
    scored["cost"] = protection_cost(
        scored[DISTANCE_COLUMN].astype("float64"), params.a, params.b, params.c
    )
    scored["priority"] = priority_score(
        scored["priority_spp"],
        scored["relative_richness"],
        scored["cost"],
        params.alpha,
        params.beta,
    )
    scored["decile"] = assign_deciles(scored["priority"])

    n_defined = int(scored["priority"].notna().sum())
    if n_defined == 0:
        logger.warning("No cells with a defined priority (%d cells in population)", len(scored))
        status = ScoreStatus.NO_DATA
    else:
        logger.info("Scored %d cells (%d without a defined priority)", n_defined, len(scored) - n_defined)
        status = ScoreStatus.OK

    return ScoringResult(cells=scored, status=status, max_richness=max_richness)
