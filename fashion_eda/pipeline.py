"""
High-level orchestration utilities for running the analysis pipeline.

Loads the dataset, saves class histograms, runs the registered stages and
writes one JSON summary per stage.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from fashion_eda.core.analysis_helpers import maybe_init_wandb
from fashion_eda.core.analysis_types import ExperimentSpec, AnalysisSettings
from fashion_eda.core import AnalysisContext, DatasetManager, StageResult
from fashion_eda.internal.datasets import plot_label_histogram
from fashion_eda.stages import (
    StageRegistry,
    DimensionalityStage,
    PerformanceStage,
)


def _prepare_context(
    spec: ExperimentSpec,
    output_root: Path | str,
    seed: int,
    *,
    wandb_run=None,
) -> AnalysisContext:
    """Load both splits and wrap them in an AnalysisContext."""
    output_root = Path(output_root)
    out_dir = output_root / spec.name
    out_dir.mkdir(parents=True, exist_ok=True)

    dataset_mgr = DatasetManager(
        dataset_path=str(spec.dataset_path),
        dataset_name=spec.dataset_name,
    )
    X_train, y_train = dataset_mgr.get_split("train")
    X_test, y_test = dataset_mgr.get_split("test")
    info = dataset_mgr.get_info()
    print(f"[Data] train={X_train.shape}, test={X_test.shape}, "
          f"classes={info['n_classes']}, pixel range={info['pixel_range']}")

    return AnalysisContext(
        matrices={"train": X_train, "test": X_test},
        labels={"train": y_train, "test": y_test},
        label_map=dataset_mgr.get_label_map(),
        experiment=spec.name,
        output_dir=out_dir,
        metadata={"seed": seed, "dataset": info},
        wandb_run=wandb_run,
    )


def _save_label_histograms(ctx: AnalysisContext) -> None:
    """Persist class distributions of both splits."""
    hist_dir = ctx.output_dir / "label_histograms"
    hist_dir.mkdir(parents=True, exist_ok=True)

    for split in ("train", "test"):
        hist = plot_label_histogram(
            ctx.get_labels(split),
            label_map=ctx.label_map,
            title=f"Class histogram ({split})",
            save_path=hist_dir / f"{split}.png",
        )
        hist.to_csv(hist_dir / f"{split}.csv", index=False)


def build_registry() -> StageRegistry:
    registry = StageRegistry()
    registry.register(DimensionalityStage())
    registry.register(PerformanceStage())
    return registry


def run_analysis_pipeline(
    spec: ExperimentSpec,
    settings: AnalysisSettings,
    output_root: Path,
    seed: int = 42,
    use_wandb: bool = False,
    wandb_project: Optional[str] = None,
    wandb_run_name: Optional[str] = None,
) -> List[StageResult]:
    """Run the PCA and model-comparison stages for one experiment."""

    wandb_run = maybe_init_wandb(use_wandb, wandb_project, wandb_run_name)
    print(f"\n{'='*70}")
    print(f"🔄 Analyzing: {spec.name} | Dataset: {spec.dataset_name}")
    print(f"{'='*70}")

    try:
        print("\n[1/3] Loading dataset...")
        ctx = _prepare_context(spec, output_root, seed, wandb_run=wandb_run)

        print("\n[2/3] Saving label histograms...")
        if settings.label_histograms.get("enabled", True):
            _save_label_histograms(ctx)

        print("\n[3/3] Running stages...")
        run_settings = settings.for_experiment(spec)
        results = build_registry().run_all(ctx, run_settings, ctx.output_dir)

        for res in results:
            res.save_json(ctx.output_dir / f"{res.stage_name}_result.json")

        print(f"\n{'='*70}")
        print(f"✅ Analysis complete: {ctx.output_dir}")
        print(f"{'='*70}\n")
        return results

    finally:
        if wandb_run:
            wandb_run.finish()
