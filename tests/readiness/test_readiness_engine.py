import pytest

from services.readiness_engine.engine import ReadinessEngine
from services.readiness_engine.loader import CatalogValidationError


@pytest.fixture(scope="module")
def engine():
    """Engine loaded with the bundled catalog."""
    try:
        return ReadinessEngine()
    except Exception as e:
        pytest.fail(f"Failed to initialize ReadinessEngine: {e}")


def test_get_questions_shape(engine):
    questions = engine.get_questions()
    assert len(questions) == 10
    first = questions[0]
    assert first["id"] == 1
    assert first["name"] == "Strategic Vision & Value"
    assert set(first["themes"][0]) == {"title", "left", "right"}


def test_calculate_returns_totals_average_and_summaries(engine):
    report = engine.calculate({"Strategic Vision & Value": [0, 0, 0], "Leadership & Accountability": [4, 4, 4]})

    assert report.catalog_version == "1.0.0"
    assert len(report.totals) == 10
    assert report.totals[0].readiness == 100
    assert report.totals[1].readiness == 0
    # 100 + 0 + 8 * 50 = 500 over 10 categories
    assert report.avg == 50
    assert report.answers[0].questions[0].alignment == "left"


def test_engine_accepts_prebuilt_catalog(small_catalog):
    engine = ReadinessEngine(catalog=small_catalog)
    assert engine.calculate({}).catalog_version == "test-1"


def test_engine_with_missing_catalog_file(tmp_path):
    with pytest.raises(CatalogValidationError):
        ReadinessEngine(catalog_path=tmp_path / "nope.yml")
