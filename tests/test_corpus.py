from datetime import date

import pandas as pd
import pytest
from jsonschema import Draft202012Validator

from news_corpus.assembler import assemble
from news_corpus.corpus import (
    feature_columns,
    format_errors,
    load_schema,
    replace_features,
    to_records,
    validate_corpus,
    validate_records,
)
from news_corpus.errors import JoinError, SchemaError
from news_corpus.models import ArticleRecord


@pytest.fixture
def table():
    records = [
        ArticleRecord(id=1, date=date(2020, 1, 12), source="Le_Soir", text="hello world"),
        ArticleRecord(id=2, date=date(2021, 3, 5), source="De_Tijd", text="test"),
        ArticleRecord(id=3, date=None, source="Metro_FR", text="economie"),
    ]
    return assemble(records, french_outlets=["Le_Soir", "Metro_FR"])


def test_feature_columns_are_the_source_indicators(table):
    assert feature_columns(table) == ["De_Tijd", "Le_Soir", "Metro_FR"]


def test_validate_corpus_rejects_out_of_range_features(table):
    broken = table.assign(Le_Soir=table["Le_Soir"] * 2)

    with pytest.raises(SchemaError) as excinfo:
        validate_corpus(broken)
    assert excinfo.value.ids == [1]


def test_validate_corpus_rejects_non_numeric_features(table):
    with pytest.raises(SchemaError):
        validate_corpus(table.assign(topic="high"))


def test_replace_features_keeps_id_date_text(table):
    scores = pd.DataFrame({"id": [3, 1, 2], "economy": [0.8, 0.1, 0.55]})

    replaced = replace_features(table, scores)

    assert feature_columns(replaced) == ["economy"]
    pd.testing.assert_frame_equal(
        replaced[["id", "date", "text", "language"]], table[["id", "date", "text", "language"]]
    )
    assert replaced.set_index("id").loc[3, "economy"] == pytest.approx(0.8)
    assert "Le_Soir" in table.columns


def test_replace_features_requires_matching_ids(table):
    scores = pd.DataFrame({"id": [1, 2], "economy": [0.1, 0.2]})

    with pytest.raises(JoinError) as excinfo:
        replace_features(table, scores)
    assert excinfo.value.ids == [3]


def test_replace_features_rejects_out_of_range_scores(table):
    scores = pd.DataFrame({"id": [1, 2, 3], "economy": [0.1, 1.5, 0.2]})

    with pytest.raises(SchemaError):
        replace_features(table, scores)


def test_records_match_bundled_schema(table):
    records = validate_records(to_records(table))

    by_id = {r["id"]: r for r in records}
    assert by_id[1]["date"] == "2020-01-12"
    assert by_id[3]["date"] is None
    assert by_id[1]["Le_Soir"] == 1
    assert load_schema()["title"] == "CorpusRecord"


def test_validate_records_reports_bad_feature_values():
    record = {"id": 1, "date": "2020-01-12", "text": "x", "language": "fr", "topic": 3}

    with pytest.raises(SchemaError) as excinfo:
        validate_records([record])
    assert "topic" in str(excinfo.value)


def test_format_errors_lists_violations_by_column():
    record = {"id": 1, "date": "2020-01-12", "language": "", "topic": 3}
    errors = Draft202012Validator(load_schema()).iter_errors(record)

    message = format_errors(errors)

    assert message.index("(row):") < message.index("language:") < message.index("topic:")
    assert "'text'" in message
