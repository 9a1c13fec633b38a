#!/usr/bin/env python3
"""Example: Score candidate m6A sites with a pre-trained classifier.

This example demonstrates the complete workflow:
1. Generate synthetic labelled sites (in real use, the model is trained elsewhere)
2. Fit a random forest on the encoded design matrix
3. Predict a batch of new sites
4. Predict a single site
"""

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier

from m6a_predict import encode, predict_batch, predict_single
from m6a_predict.categories import RNA_REGIONS, RNA_TYPES
from m6a_predict.classifier import build_design_matrix
from m6a_predict.logging_config import configure_logging


def create_synthetic_sites(n_sites: int, seed: int = 0) -> pd.DataFrame:
    """Create synthetic sites. DRACH-like k-mers (A at the centre) are modified."""
    rng = np.random.default_rng(seed)
    sites = pd.DataFrame(
        {
            "gc_content": rng.uniform(0.2, 0.8, n_sites),
            "RNA_type": rng.choice(RNA_TYPES, n_sites),
            "RNA_region": rng.choice(RNA_REGIONS, n_sites),
            "exon_length": rng.integers(100, 5000, n_sites),
            "distance_to_junction": rng.normal(0, 300, n_sites),
            "evolutionary_conservation": rng.uniform(0, 1, n_sites),
            "DNA_5mer": ["".join(rng.choice(list("ATCG"), 5)) for _ in range(n_sites)],
        }
    )
    return sites


def main():
    """Run the complete prediction example."""
    configure_logging(level="INFO")

    print(f"\n{'='*60}")
    print("Step 1: Creating Synthetic Training Data")
    print(f"{'='*60}")
    train = create_synthetic_sites(500)
    labels = np.where(train["DNA_5mer"].str[2] == "A", "Positive", "Negative")
    print(f"✓ {len(train)} sites, {(labels == 'Positive').sum()} positive")

    print(f"\n{'='*60}")
    print("Step 2: Fitting Random Forest")
    print(f"{'='*60}")
    features = pd.concat([train, encode(train["DNA_5mer"])], axis=1)
    design = build_design_matrix(features)
    forest = RandomForestClassifier(n_estimators=200, random_state=0).fit(design, labels)
    print(f"✓ Trained on {design.shape[1]} features")

    print(f"\n{'='*60}")
    print("Step 3: Batch Prediction")
    print(f"{'='*60}")
    new_sites = create_synthetic_sites(10, seed=1)
    result = predict_batch(forest, new_sites, threshold=0.5)
    print(result[["DNA_5mer", "predicted_m6A_prob", "predicted_m6A_status"]].to_string())

    print(f"\n{'='*60}")
    print("Step 4: Single Prediction")
    print(f"{'='*60}")
    single = predict_single(forest, 0.45, "mRNA", "CDS", 1500, 120, 0.8, "GGACT")
    print(f"GGACT: prob={single.prob:.3f} status={single.status}")


if __name__ == "__main__":
    main()
