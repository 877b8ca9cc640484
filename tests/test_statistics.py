import pandas as pd
import pytest

from p01_country_similarity.statistics import (
    average_by_group,
    correlation_matrix,
    describe_values,
    feature_averages_by_status,
    numeric_frame,
    top_n_per_group,
    yearly_group_averages,
)


@pytest.fixture
def sample_df():
    return pd.DataFrame({
        "Country": ["A", "B", "C", "D", "E"],
        "Year": ["2014", "2014", "2014", "2015", "2015"],
        "Status": ["Developed", "Developing", "Developing", "Developed", ""],
        "Life expectancy": ["80", "60", "abc", "81", "70"],
        "GDP": ["40000", "2000", "1000", "42000", "3000"],
        "Constant": ["1", "1", "1", "1", "1"],
    })


def test_describe_values():
    stats = describe_values([1, 2, 3, 4])
    assert stats["count"] == 4
    assert stats["mean"] == 2.5
    assert stats["median"] == 2.5
    assert stats["variance"] == pytest.approx(5 / 3)
    assert stats["std"] == pytest.approx((5 / 3) ** 0.5)


def test_describe_values_ignores_unparsable():
    stats = describe_values(["1", "x", None, "3"])
    assert stats["count"] == 2
    assert stats["mean"] == 2.0


def test_describe_values_empty_and_single():
    assert describe_values([]) == {"count": 0, "mean": 0.0, "median": 0.0, "std": 0.0, "variance": 0.0}
    single = describe_values([7])
    assert single["mean"] == 7.0
    assert single["variance"] == 0.0


def test_numeric_frame_drops_text_columns(sample_df):
    df = numeric_frame(sample_df, exclude=["Year"])
    assert list(df.columns) == ["Life expectancy", "GDP", "Constant"]


def test_correlation_matrix(sample_df):
    corr = correlation_matrix(sample_df, exclude=["Country", "Year", "Status"])
    assert corr.shape == (3, 3)
    assert corr.loc["GDP", "GDP"] == pytest.approx(1.0)
    assert corr.loc["Life expectancy", "GDP"] > 0.9
    # constant column has no defined correlation
    assert corr.loc["Constant", "GDP"] == 0.0


def test_top_n_per_group(sample_df):
    top = top_n_per_group(sample_df, "Year", "Life expectancy", "Country", n=2)
    assert top.values.tolist() == [
        ["2014", "A", 80.0],
        ["2014", "B", 60.0],
        ["2015", "D", 81.0],
        ["2015", "E", 70.0],
    ]


def test_average_by_group_skips_empty_groups(sample_df):
    avg = average_by_group(sample_df, "Status", "Life expectancy")
    # unparsable "abc" counts as 0.0
    assert avg == {"Developed": 80.5, "Developing": 30.0}


def test_yearly_group_averages(sample_df):
    pivot = yearly_group_averages(sample_df, "GDP", "Year", "Status")
    assert list(pivot.index) == ["2014", "2015"]
    assert pivot.loc["2014", "Developing"] == 1500.0
    assert pivot.loc["2015", "Developing"] == 0.0
    assert pivot.loc["2015", "Developed"] == 42000.0


def test_feature_averages_by_status(sample_df):
    table = feature_averages_by_status(sample_df, ["Life expectancy", "GDP"], "Status")
    assert list(table.index) == ["Life expectancy", "GDP"]
    assert list(table.columns) == ["Developed", "Developing"]
    assert table.loc["Life expectancy", "Developing"] == 30.0
    assert table.loc["GDP", "Developed"] == 41000.0


def test_feature_averages_by_status_fills_absent_status(sample_df):
    only_developing = sample_df[sample_df["Status"] == "Developing"]
    table = feature_averages_by_status(only_developing, ["GDP"], "Status", statuses=["Developed", "Developing"])
    assert table.loc["GDP"].tolist() == [0.0, 1500.0]
