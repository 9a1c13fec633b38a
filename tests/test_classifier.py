"""Tests for classifier adapters around scikit-learn and XGBoost models."""

import numpy as np
import pandas as pd
import pytest
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression

from m6a_predict.categories import RNA_REGIONS, RNA_TYPES, coerce_categorical
from m6a_predict.classifier import (
    Classifier,
    SklearnClassifier,
    align_features,
    as_classifier,
    build_design_matrix,
)
from m6a_predict.encoding import encode
from m6a_predict.errors import SchemaMismatchError
from m6a_predict.predict import predict_batch, predict_single


def make_sites(n_sites, seed=0):
    """Generate synthetic sites whose label depends on the central base."""
    rng = np.random.default_rng(seed)
    kmers = ["".join(rng.choice(list("ATCG"), 5)) for _ in range(n_sites)]
    rows = pd.DataFrame(
        {
            "gc_content": rng.uniform(0, 1, n_sites),
            "RNA_type": rng.choice(RNA_TYPES, n_sites),
            "RNA_region": rng.choice(RNA_REGIONS, n_sites),
            "exon_length": rng.integers(100, 5000, n_sites),
            "distance_to_junction": rng.normal(0, 200, n_sites),
            "evolutionary_conservation": rng.uniform(0, 1, n_sites),
            "DNA_5mer": kmers,
        }
    )
    labels = np.where(rows["DNA_5mer"].str[2] == "A", "Positive", "Negative")
    return rows, labels


def design_for(rows):
    features = pd.concat([rows, encode(rows["DNA_5mer"])], axis=1)
    return build_design_matrix(features)


@pytest.fixture
def training_data():
    rows, labels = make_sites(120)
    return design_for(rows), labels


@pytest.fixture
def forest(training_data):
    """Random forest fit on a named design matrix."""
    design, labels = training_data
    return RandomForestClassifier(n_estimators=25, random_state=0).fit(design, labels)


def test_design_matrix_columns():
    """Test the indicator expansion and its stable column set."""
    rows, _ = make_sites(1)
    rows.loc[0, "RNA_type"] = "mRNA"
    design = design_for(rows)

    assert design.shape == (1, 4 + 4 + 4 + 5 * 4)
    assert list(design.columns[:4]) == [
        "gc_content",
        "exon_length",
        "distance_to_junction",
        "evolutionary_conservation",
    ]
    assert [c for c in design.columns if c.startswith("RNA_type_")] == [
        "RNA_type_mRNA",
        "RNA_type_lincRNA",
        "RNA_type_lncRNA",
        "RNA_type_pseudogene",
    ]
    assert "RNA_region_3'UTR" in design.columns
    assert design.loc[0, "RNA_type_mRNA"] == 1.0
    assert design.loc[0, "RNA_type_lincRNA"] == 0.0
    assert all(design.dtypes == float)


def test_design_matrix_one_base_per_position(training_data):
    """Test that each position has exactly one active base indicator."""
    design, _ = training_data
    for i in range(1, 6):
        block = design[[f"nt_pos{i}_{base}" for base in "ATCG"]]
        assert (block.sum(axis=1) == 1.0).all()


def test_design_matrix_requires_encoding():
    """Test that an unencoded table is rejected."""
    rows, _ = make_sites(3)
    with pytest.raises(SchemaMismatchError, match="nt_pos"):
        build_design_matrix(rows)


def test_align_features_reorders():
    """Test reordering to the model's feature order."""
    design = pd.DataFrame({"a": [1.0], "b": [2.0]})
    assert list(align_features(design, ["b", "a"]).columns) == ["b", "a"]


def test_align_features_mismatch():
    """Test that differing feature sets are reported."""
    design = pd.DataFrame({"a": [1.0], "b": [2.0]})
    with pytest.raises(SchemaMismatchError, match="missing \\['c'\\]"):
        align_features(design, ["a", "b", "c"])


def test_as_classifier_dispatch(forest):
    """Test wrapping rules for the Classifier protocol."""
    wrapped = as_classifier(forest)
    assert isinstance(wrapped, SklearnClassifier)
    assert isinstance(wrapped, Classifier)
    assert as_classifier(wrapped) is wrapped

    with pytest.raises(TypeError):
        as_classifier(object())


def test_sklearn_adapter_requires_predict_proba():
    """Test that estimators without predict_proba are rejected."""
    with pytest.raises(TypeError):
        SklearnClassifier(object())


def test_predict_batch_with_forest(forest):
    """Test batch prediction with a fitted random forest."""
    rows, _ = make_sites(15, seed=1)
    result = predict_batch(forest, rows)

    expected = forest.predict_proba(design_for(rows))[:, list(forest.classes_).index("Positive")]
    assert result["predicted_m6A_prob"].to_numpy() == pytest.approx(expected)
    assert set(result["predicted_m6A_status"]) <= {"Positive", "Negative"}
    assert ((result["predicted_m6A_prob"] > 0.5) == (result["predicted_m6A_status"] == "Positive")).all()


def test_predict_single_with_forest(forest):
    """Test single-site prediction with a fitted random forest."""
    rows, _ = make_sites(1, seed=2)
    row = rows.iloc[0]
    result = predict_single(
        forest,
        row["gc_content"],
        row["RNA_type"],
        row["RNA_region"],
        row["exon_length"],
        row["distance_to_junction"],
        row["evolutionary_conservation"],
        row["DNA_5mer"],
    )
    batch = predict_batch(forest, rows)

    assert result.prob == pytest.approx(batch.loc[0, "predicted_m6A_prob"])
    assert result.status == batch.loc[0, "predicted_m6A_status"]


def test_feature_name_mismatch(training_data):
    """Test that a model fit on other features fails before scoring."""
    design, labels = training_data
    model = LogisticRegression(max_iter=500).fit(design.drop(columns=["gc_content"]), labels)
    rows, _ = make_sites(5, seed=3)

    with pytest.raises(SchemaMismatchError, match="unexpected \\['gc_content'\\]"):
        predict_batch(model, rows)


def test_unnamed_model_feature_count(training_data):
    """Test the feature count check for models fit on plain arrays."""
    design, labels = training_data
    model = LogisticRegression(max_iter=500).fit(design.to_numpy()[:, 1:], labels)
    rows, _ = make_sites(5, seed=3)

    with pytest.raises(SchemaMismatchError, match="expects 31 features"):
        predict_batch(model, rows)


def test_unnamed_model_scores(training_data):
    """Test that models fit on plain arrays score in column order."""
    design, labels = training_data
    model = LogisticRegression(max_iter=500).fit(design.to_numpy(), labels)
    rows, _ = make_sites(5, seed=4)

    result = predict_batch(model, rows)
    expected = model.predict_proba(design_for(rows).to_numpy())[:, 1]
    assert result["predicted_m6A_prob"].to_numpy() == pytest.approx(expected)


def test_predict_batch_with_xgboost(training_data):
    """Test batch prediction with a binary-logistic XGBoost booster."""
    xgb = pytest.importorskip("xgboost")
    design, labels = training_data
    dtrain = xgb.DMatrix(design, label=(labels == "Positive").astype(int))
    booster = xgb.train({"objective": "binary:logistic", "max_depth": 3}, dtrain, num_boost_round=10)

    rows, _ = make_sites(8, seed=5)
    result = predict_batch(booster, rows)

    expected = booster.predict(xgb.DMatrix(design_for(rows)))
    assert result["predicted_m6A_prob"].to_numpy() == pytest.approx(expected, rel=1e-5)
    assert ((result["predicted_m6A_prob"] > 0.5) == (result["predicted_m6A_status"] == "Positive")).all()


def test_design_matrix_missing_categories_are_all_zero():
    """Test that missing categories and bases give all-zero indicator blocks."""
    rows, _ = make_sites(2)
    rows["RNA_type"] = coerce_categorical(
        ["tRNA", "mRNA"], RNA_TYPES, "RNA_type", on_invalid="missing"
    )
    encoded = encode(["ATNGA", "ATCGA"], on_invalid="missing")
    design = build_design_matrix(pd.concat([rows, encoded], axis=1))

    type_block = design[[f"RNA_type_{rna_type}" for rna_type in RNA_TYPES]]
    assert type_block.sum(axis=1).tolist() == [0.0, 1.0]

    base_block = design[[f"nt_pos3_{base}" for base in "ATCG"]]
    assert base_block.sum(axis=1).tolist() == [0.0, 1.0]


def test_predict_batch_missing_category_with_forest(forest):
    """Test scoring a row whose RNA type was coerced to missing."""
    rows, _ = make_sites(3, seed=6)
    rows.loc[0, "RNA_type"] = "tRNA"

    result = predict_batch(forest, rows, on_invalid="missing")

    coerced = rows.copy()
    coerced["RNA_type"] = coerce_categorical(
        rows["RNA_type"], RNA_TYPES, "RNA_type", on_invalid="missing"
    )
    positive = list(forest.classes_).index("Positive")
    expected = forest.predict_proba(design_for(coerced))[:, positive]

    assert pd.isna(result.loc[0, "RNA_type"])
    assert result["predicted_m6A_prob"].to_numpy() == pytest.approx(expected)
    assert result.loc[0, "predicted_m6A_status"] in {"Positive", "Negative"}
