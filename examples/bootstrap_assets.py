#!/usr/bin/env python3
"""
Generate a toy dataset and demo prediction archives for the sample config.

Running this script will populate `examples/assets/` with:
    - toy_fashion.npz: synthetic 28x28 uint8 images, 10 classes
    - predictions_noisy_10.npz / predictions_noisy_30.npz: labels with a
      fixed share replaced at random, standing in for a fitted model's
      out-of-sample train predictions and test predictions
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from fashion_eda.core.labels import FASHION_CLASS_NAMES


@dataclass
class ToyDatasetConfig:
    image_size: int = 28
    num_classes: int = len(FASHION_CLASS_NAMES)
    train_per_class: int = 60
    test_per_class: int = 20
    noise: float = 25.0


def _class_templates(cfg: ToyDatasetConfig, rng: np.random.Generator) -> np.ndarray:
    # one smooth blob pattern per class
    h = w = cfg.image_size
    yy, xx = np.mgrid[:h, :w]
    templates = np.zeros((cfg.num_classes, h, w))
    for c in range(cfg.num_classes):
        cy, cx = rng.uniform(6, h - 6, size=2)
        sy, sx = rng.uniform(2.5, 7.0, size=2)
        templates[c] = 200.0 * np.exp(-(((yy - cy) / sy) ** 2 + ((xx - cx) / sx) ** 2))
    return templates


def _sample_split(templates: np.ndarray, per_class: int, noise: float, rng: np.random.Generator):
    n_classes = templates.shape[0]
    labels = np.repeat(np.arange(n_classes), per_class)
    images = templates[labels] + rng.normal(0.0, noise, size=(labels.size,) + templates.shape[1:])
    images = np.clip(np.rint(images), 0, 255).astype(np.uint8)
    order = rng.permutation(labels.size)
    return images[order], labels[order]


def generate_toy_dataset(cfg: ToyDatasetConfig, out_path: Path, seed: int = 1234):
    rng = np.random.default_rng(seed)
    templates = _class_templates(cfg, rng)
    x_train, y_train = _sample_split(templates, cfg.train_per_class, cfg.noise, rng)
    x_test, y_test = _sample_split(templates, cfg.test_per_class, cfg.noise, rng)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(
        out_path,
        x_train=x_train,
        y_train=y_train,
        x_test=x_test,
        y_test=y_test,
        class_names=np.array(FASHION_CLASS_NAMES[:cfg.num_classes]),
    )
    print(f"[assets] Saved dataset to {out_path}")
    return y_train, y_test


def _corrupt(labels: np.ndarray, rate: float, n_classes: int, rng: np.random.Generator) -> np.ndarray:
    pred = labels.copy()
    flip = rng.random(labels.size) < rate
    pred[flip] = rng.integers(0, n_classes, size=int(flip.sum()))
    return pred


def save_noisy_predictions(path: Path, y_train, y_test, rate: float, n_classes: int, seed: int):
    rng = np.random.default_rng(seed)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(
        path,
        train_pred=_corrupt(y_train, rate, n_classes, rng),
        test_pred=_corrupt(y_test, rate * 1.2, n_classes, rng),
    )
    print(f"[assets] Saved predictions to {path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate toy assets for fashion_eda.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(__file__).resolve().parent / "assets",
        help="Directory where assets will be written.",
    )
    args = parser.parse_args()

    output_dir = args.output_dir
    cfg = ToyDatasetConfig()
    dataset_path = output_dir / "toy_fashion.npz"
    y_train, y_test = generate_toy_dataset(cfg, dataset_path)

    for rate, seed in ((0.10, 42), (0.30, 1337)):
        save_noisy_predictions(
            output_dir / f"predictions_noisy_{int(rate * 100)}.npz",
            y_train,
            y_test,
            rate=rate,
            n_classes=cfg.num_classes,
            seed=seed,
        )

    print("\nAssets ready!")
    print(f"- Dataset: {dataset_path}")
    print("Run: fashion-eda --config examples/configs/sample_analysis.yaml")


if __name__ == "__main__":
    main()
