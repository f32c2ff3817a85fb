import numpy as np
import pandas as pd
import pytest

from sharkprio.scoring import (
    ScoringParams,
    ScoreStatus,
    assign_deciles,
    filter_zone,
    priority_score,
    protection_cost,
    relative_richness,
    score_cells,
)


@pytest.fixture
def three_cells() -> pd.DataFrame:
    """The three cell worked example."""
    return pd.DataFrame(
        {
            "p_silky": [0.5, 0.2, 0.9],
            "p_hammerhead": [0.4, 0.8, 0.9],
            "species_richness": [10.0, 20.0, 5.0],
            "distance_to_port": [0.0, 500.0, 1000.0],
        },
        index=pd.Index([1, 2, 3], name="cell_id"),
    )


def test_three_cell_scenario(three_cells, params):
    result = score_cells(three_cells, params)
    cells = result.cells

    assert result.status == ScoreStatus.OK
    assert result.max_richness == 20.0
    assert cells["priority_spp"].tolist() == pytest.approx([0.20, 0.16, 0.81])
    assert cells["relative_richness"].tolist() == pytest.approx([0.5, 1.0, 0.25])
    assert cells["cost"].tolist() == pytest.approx([200000.0, 200000.0, 1200000.0])
    assert cells["priority"].tolist() == pytest.approx([5e-7, 8e-7, 1.6875e-7])

    # Cell 3 has the highest joint probability but the lowest score
    assert cells["priority_spp"].idxmax() == 3
    assert cells["priority"].idxmin() == 3
    assert list(cells["priority"].sort_values().index) == [3, 1, 2]
    assert cells["decile"].tolist() == [4, 7, 1]
    assert result.n_scored == 3


def test_protection_cost():
    assert protection_cost(0.0, a=2.0, b=1000.0, c=2e5) == 2e5
    assert protection_cost(100.0, a=2.0, b=1000.0, c=2e5) == 120000.0


def test_protection_cost_is_not_clamped():
    assert protection_cost(10.0, a=0.0, b=1.0, c=0.0) == -10.0


def test_missing_richness_propagates(three_cells, params):
    three_cells.loc[2, "species_richness"] = np.nan
    cells = score_cells(three_cells, params).cells

    assert np.isnan(cells.loc[2, "relative_richness"])
    assert np.isnan(cells.loc[2, "priority"])
    assert pd.isna(cells.loc[2, "decile"])
    # Max is taken over the remaining cells
    assert cells.loc[1, "relative_richness"] == 1.0
    assert cells.loc[3, "relative_richness"] == 0.5


@pytest.mark.parametrize("column", ["species_richness", "distance_to_port", "p_silky", "p_hammerhead"])
@pytest.mark.parametrize("alpha", [0.0, 0.5, 1.0])
@pytest.mark.parametrize("beta", [0.0, 0.5, 1.0])
def test_missing_input_gives_no_priority(three_cells, column, alpha, beta):
    three_cells.loc[2, column] = np.nan
    params = ScoringParams(alpha=alpha, beta=beta, a=2.0, b=1000.0, c=2e5)
    cells = score_cells(three_cells, params).cells

    assert np.isnan(cells.loc[2, "priority"])
    assert pd.isna(cells.loc[2, "decile"])
    assert cells["priority"].notna().sum() == 2
    # Only the two defined cells are ranked
    assert cells.loc[[1, 3], "decile"].notna().all()


def test_zero_exponents_ignore_richness_and_cost(three_cells):
    params = ScoringParams(alpha=0.0, beta=0.0, a=2.0, b=1000.0, c=2e5)
    cells = score_cells(three_cells, params).cells
    assert cells["priority"].tolist() == pytest.approx(cells["priority_spp"].tolist())


def test_richest_cell_is_exactly_one():
    richness = pd.Series([3.0, 7.3, np.nan, 0.0])
    rel = relative_richness(richness)
    assert rel.iloc[1] == 1.0
    assert rel.iloc[3] == 0.0
    assert np.isnan(rel.iloc[2])


def test_zero_richness_maximum_is_missing():
    rel = relative_richness(pd.Series([0.0, 0.0]))
    assert rel.isna().all()


def test_zero_cost_gives_missing_priority(three_cells):
    # cost = d^2 - 500 d is zero at d = 500
    params = ScoringParams(alpha=1.0, beta=1.0, a=1.0, b=500.0, c=0.0)
    cells = score_cells(three_cells, params).cells

    assert cells.loc[2, "cost"] == 0.0
    assert np.isnan(cells.loc[2, "priority"])
    assert pd.isna(cells.loc[2, "decile"])
    assert cells["priority"].notna().sum() == 1


def test_negative_cost_with_fractional_beta_is_missing(three_cells):
    params = ScoringParams(alpha=1.0, beta=0.5, a=0.0, b=1.0, c=0.0)
    cells = score_cells(three_cells, params).cells

    assert (cells.loc[[2, 3], "cost"] < 0).all()
    assert cells.loc[[2, 3], "priority"].isna().all()


def test_negative_cost_with_integer_beta_is_kept(three_cells):
    params = ScoringParams(alpha=1.0, beta=1.0, a=0.0, b=1.0, c=0.0)
    cells = score_cells(three_cells, params).cells

    assert cells.loc[2, "priority"] == pytest.approx(0.16 * 1.0 / -500.0)


def test_priority_monotonic_at_fixed_cost():
    spp = pd.Series(np.linspace(0.0, 1.0, 11))
    rel = pd.Series(np.linspace(0.1, 1.0, 11))
    cost = pd.Series(np.full(11, 5000.0))

    by_spp = priority_score(spp, pd.Series(np.full(11, 0.5)), cost, alpha=2.0, beta=0.5)
    by_rel = priority_score(pd.Series(np.full(11, 0.5)), rel, cost, alpha=2.0, beta=0.5)

    assert (np.diff(by_spp.to_numpy()) >= 0).all()
    assert (np.diff(by_rel.to_numpy()) >= 0).all()


@pytest.mark.parametrize("n", [10, 20, 100])
def test_deciles_partition_evenly(n):
    rng = np.random.default_rng(n)
    priority = pd.Series(rng.random(n))
    deciles = assign_deciles(priority)

    counts = deciles.value_counts().sort_index()
    assert list(counts.index) == list(range(1, 11))
    assert (counts == n // 10).all()
    assert counts.sum() == n


def test_deciles_uneven_population():
    priority = pd.Series(np.arange(23, dtype=float))
    deciles = assign_deciles(priority)

    counts = deciles.value_counts()
    assert set(counts.unique()) <= {2, 3}
    assert counts.sum() == 23
    assert deciles.is_monotonic_increasing
    assert deciles.iloc[0] == 1
    assert deciles.iloc[-1] == 10


def test_deciles_follow_priority_order():
    priority = pd.Series([0.9, 0.1, 0.5, 0.3, 0.7, 0.2, 0.8, 0.4, 0.6, 0.0])
    deciles = assign_deciles(priority)
    assert deciles.tolist() == [10, 2, 6, 4, 8, 3, 9, 5, 7, 1]


def test_deciles_ties_keep_input_order():
    priority = pd.Series(np.full(10, 0.5), index=range(100, 110))
    deciles = assign_deciles(priority)
    assert deciles.tolist() == list(range(1, 11))


def test_deciles_skip_missing():
    priority = pd.Series([0.1, np.nan, 0.3])
    deciles = assign_deciles(priority)

    assert pd.isna(deciles.iloc[1])
    assert deciles.iloc[0] == 1
    assert deciles.iloc[2] == 6


def test_score_cells_filters_zone(three_cells, params):
    three_cells["zone_id"] = [1, 1, 2]
    three_cells.loc[3, "species_richness"] = 100.0

    result = score_cells(three_cells, params, target_zone=1)
    cells = result.cells

    assert list(cells.index) == [1, 2]
    assert result.max_richness == 20.0
    assert cells["relative_richness"].tolist() == pytest.approx([0.5, 1.0])


def test_filter_zone_requires_zone_column(three_cells):
    with pytest.raises(ValueError):
        filter_zone(three_cells, 1)


def test_empty_zone_is_no_data(three_cells, params):
    three_cells["zone_id"] = [1, 1, 1]
    result = score_cells(three_cells, params, target_zone=7)

    assert result.status == ScoreStatus.NO_DATA
    assert result.cells.empty
    assert np.isnan(result.max_richness)
    assert result.n_scored == 0


def test_all_richness_missing_is_no_data(three_cells, params):
    three_cells["species_richness"] = np.nan
    result = score_cells(three_cells, params)

    assert result.status == ScoreStatus.NO_DATA
    assert len(result.cells) == 3
    assert result.cells["decile"].isna().all()


def test_missing_columns_raise(three_cells, params):
    with pytest.raises(ValueError, match="distance_to_port"):
        score_cells(three_cells.drop(columns="distance_to_port"), params)


def test_duplicate_cell_ids_raise(three_cells, params):
    three_cells.index = pd.Index([1, 1, 2], name="cell_id")
    with pytest.raises(ValueError, match="unique"):
        score_cells(three_cells, params)


def test_input_is_not_mutated(three_cells, params):
    original = three_cells.copy()
    score_cells(three_cells, params)
    pd.testing.assert_frame_equal(three_cells, original)


def test_custom_species_columns(three_cells, params):
    three_cells["p_blue"] = [1.0, 0.5, 0.0]
    cells = score_cells(
        three_cells, params, species_columns=("p_silky", "p_hammerhead", "p_blue")
    ).cells
    assert cells["priority_spp"].tolist() == pytest.approx([0.2, 0.08, 0.0])
