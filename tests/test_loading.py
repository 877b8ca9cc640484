import pytest

from p01_country_similarity.errors import EmptyInputError, FileError, FormatError, ParseWarning
from p01_country_similarity.loading import (
    Entity,
    FeatureTable,
    MissingPolicy,
    load_feature_table,
    resolve_columns,
)


def test_load_preserves_row_order_and_labels(features_csv):
    table = load_feature_table(features_csv, [1, 2], label_column=0)
    assert table.labels == ("A", "B", "C", "D", "E")
    assert table.vectors[1] == (2.0, 0.0)
    assert table.feature_names == ("f1", "f2")
    assert table.source == str(features_csv)
    assert len(table) == 5
    assert table.dimension == 2
    assert table.is_rectangular


def test_iteration_yields_entities(features_csv):
    table = load_feature_table(features_csv, ["f1", "f2"], label_column="Country")
    first = next(iter(table))
    assert first == Entity("A", (1.0, 0.0))
    assert table[4] == Entity("E", (0.0, 3.0))


def test_unparsable_cells_are_dropped(write_csv):
    path = write_csv("name,x,y,z\nA,1,abc,3\nB,,2,4\nC,5,6,7\n")
    with pytest.warns(ParseWarning):
        table = load_feature_table(path, [1, 2, 3])
    # each row keeps only the cells that parsed, in column order
    assert table.vectors == ((1.0, 3.0), (2.0, 4.0), (5.0, 6.0, 7.0))
    assert not table.is_rectangular
    assert table.dimension == 3


def test_columns_past_the_end_are_absent(write_csv):
    path = write_csv("name,x\nA,1\nB,2\n")
    with pytest.warns(ParseWarning):
        table = load_feature_table(path, [1, 7])
    assert table.vectors == ((1.0,), (2.0,))
    assert table.feature_names == ("x", "column_7")


def test_missing_label_column_gives_empty_labels(write_csv):
    path = write_csv("x,y\n1,2\n3,4\n")
    table = load_feature_table(path, [0, 1], label_column=5)
    assert table.labels == ("", "")


def test_infinite_values_are_treated_as_absent(write_csv):
    path = write_csv("name,x,y\nA,inf,1\nB,2,3\n")
    with pytest.warns(ParseWarning):
        table = load_feature_table(path, [1, 2])
    assert table.vectors == ((1.0,), (2.0, 3.0))


def test_impute_policy_uses_column_mean(write_csv):
    path = write_csv("name,x,y\nA,1,\nB,3,4\nC,5,6\n")
    with pytest.warns(ParseWarning):
        table = load_feature_table(path, [1, 2], missing_policy="impute")
    assert table.vectors == ((1.0, 5.0), (3.0, 4.0), (5.0, 6.0))
    assert table.is_rectangular


def test_impute_policy_uses_given_defaults(write_csv):
    path = write_csv("name,x,y\nA,1,\nB,3,4\n")
    with pytest.warns(ParseWarning):
        table = load_feature_table(
            path, ["x", "y"], missing_policy=MissingPolicy.IMPUTE, impute_values={"y": 0.5}
        )
    assert table.vectors == ((1.0, 0.5), (3.0, 4.0))


def test_unknown_policy_is_rejected(features_csv):
    with pytest.raises(ValueError):
        load_feature_table(features_csv, [1, 2], missing_policy="guess")


def test_missing_file_raises_file_error(tmp_path):
    missing = tmp_path / "nope.csv"
    with pytest.raises(FileError) as excinfo:
        load_feature_table(missing, [1])
    assert str(missing) in str(excinfo.value)
    assert excinfo.value.path == str(missing)


def test_directory_raises_file_error(tmp_path):
    with pytest.raises(FileError):
        load_feature_table(tmp_path, [1])


def test_ragged_rows_raise_format_error(write_csv):
    path = write_csv("x,y\n1,2\n3,4,5,6\n")
    with pytest.raises(FormatError):
        load_feature_table(path, [0, 1])


def test_header_only_raises_empty_input(write_csv):
    path = write_csv("name,x,y\n")
    with pytest.raises(EmptyInputError):
        load_feature_table(path, [1, 2])


def test_empty_file_raises_empty_input(write_csv):
    path = write_csv("")
    with pytest.raises(EmptyInputError):
        load_feature_table(path, [1])


def test_no_usable_feature_column_raises_empty_input(write_csv):
    path = write_csv("name,x,y\nA,a,b\nB,,\n")
    with pytest.raises(EmptyInputError):
        load_feature_table(path, [1, 2])


def test_no_feature_columns_raises_empty_input(features_csv):
    with pytest.raises(EmptyInputError):
        load_feature_table(features_csv, [])


def test_resolve_columns():
    header = ["Country", "Year", "GDP"]
    assert resolve_columns(header, ["GDP", 1, 9]) == [2, 1, 9]
    with pytest.raises(FormatError):
        resolve_columns(header, ["Schooling"])
    with pytest.raises(ValueError):
        resolve_columns(header, [-1])


def test_feature_table_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        FeatureTable(labels=("A", "B"), vectors=((1.0,),))


def test_to_frame_pads_short_vectors():
    table = FeatureTable.from_records([("A", [1.0, 2.0]), ("B", [3.0])])
    df = table.to_frame()
    assert list(df.columns) == ["label", "feature_0", "feature_1"]
    assert df["feature_1"].isna().tolist() == [False, True]
