import pytest

from p01_country_similarity.loading import FeatureTable


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def abc_table():
    """
    Fixture: A and B point the same way, C is orthogonal to both.
    """
    return FeatureTable.from_records([
        ("A", [1.0, 0.0]),
        ("B", [1.0, 0.0]),
        ("C", [0.0, 1.0]),
    ])


@pytest.fixture
def features_csv(tmp_path):
    """
    Fixture: small CSV with two clusters, a zero vector and a singleton.
    Expected clusters at threshold 0.99: {A, B}, {C, E}, {D}.
    """
    return _write(tmp_path / "features.csv", (
        "Country,f1,f2\n"
        "A,1,0\n"
        "B,2,0\n"
        "C,0,1\n"
        "D,0,0\n"
        "E,0,3\n"
    ))


@pytest.fixture
def life_csv(tmp_path):
    """
    Fixture: miniature life expectancy dataset, two years, both statuses, a few gaps.
    """
    return _write(tmp_path / "life.csv", (
        "Country,Year,Status,Life expectancy,Adult Mortality,infant deaths,GDP,"
        "Income composition of resources,Schooling\n"
        "France,2014,Developed,82.0,80,0,42000,0.89,16.0\n"
        "France,2015,Developed,82.4,78,0,36000,0.90,16.3\n"
        "Spain,2014,Developed,83.0,70,1,29000,0.87,17.2\n"
        "Spain,2015,Developed,,68,1,25000,0.88,17.6\n"
        "Chad,2014,Developing,52.0,350,45,1000,0.39,7.2\n"
        "Chad,2015,Developing,53.1,340,44,,0.40,7.3\n"
        "Peru,2014,Developing,74.8,120,9,6500,0.73,13.0\n"
        "Peru,2015,Developing,75.0,118,8,6000,,13.1\n"
    ))


@pytest.fixture
def write_csv(tmp_path):
    """
    Fixture: helper writing arbitrary CSV text into tmp_path.
    """
    def _make(text, name="data.csv"):
        return _write(tmp_path / name, text)
    return _make
