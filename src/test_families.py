import pandas as pd
import pytest
import galois

from families import TABLE_COLUMNS, bch_design_distances, bch_family, parameter_table
from linearcode import LinearCode


def test_design_distances_skip_repeated_defining_sets():
    assert bch_design_distances(2, 15) == [2, 4, 6, 8]


@pytest.mark.parametrize("n_jobs", [1, 2])
def test_bch_family(n_jobs):
    codes = bch_family(2, 15, n_jobs=n_jobs)
    assert [C.k for C in codes] == [11, 7, 5, 1]
    assert codes[-1].d == 15


def test_parameter_table():
    codes = bch_family(7, 6)
    df = parameter_table(codes)
    assert list(df.columns) == TABLE_COLUMNS
    assert len(df) == 5
    assert set(df["family"]) == {"ReedSolomonCode"}
    assert (df["k"] + df["d"] == df["n"] + 1).all()


def test_parameter_table_generic_code():
    C = LinearCode(galois.GF(2)([[1, 1, 0], [0, 1, 1]]))
    df = parameter_table([C])
    row = df.iloc[0]
    assert row["family"] == "LinearCode"
    assert (row["n"], row["k"]) == (3, 2)
    assert pd.isna(row["design_distance"])
    assert pd.isna(row["d"])


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
