"""Dimensionality reduction stage - PCA with variance-threshold selection."""

from pathlib import Path
from typing import Dict, Any

from fashion_eda.core.context import AnalysisContext, StageResult
from fashion_eda.internal.analyses.pca_reduction import (
    DEFAULT_THRESHOLD,
    principal_components,
    project,
)
from fashion_eda.internal.analyses.pca_report import generate_variance_report


class DimensionalityStage:
    """Stage for PCA on the training split.

    Fits components on the train matrix only, keeps the smallest number
    that covers ``threshold`` of the variance, and projects both the train
    and the test matrix with that same rotation. The reduced matrices are
    stored in the context as ``train_reduced`` / ``test_reduced``.
    """

    name = "dimensionality"

    def is_enabled(self, settings: Dict[str, Any]) -> bool:
        return settings.get('enabled', True)

    def run(self, ctx: AnalysisContext, settings: Dict[str, Any], output_dir: Path) -> StageResult:
        threshold = float(settings.get('threshold', DEFAULT_THRESHOLD))
        max_plot = int(settings.get('max_plot_components', 50))

        X_train = ctx.get_matrix("train")
        X_test = ctx.get_matrix("test")

        print(f"[PCA] Fitting on train matrix {X_train.shape} (threshold={threshold:g})")
        pcs = principal_components(X_train)
        k = pcs.n_components_for(threshold)
        rotation = pcs.rotation(k)

        ctx.matrices["train_reduced"] = project(X_train, rotation)
        ctx.matrices["test_reduced"] = project(X_test, rotation)
        covered = float(pcs.cumulative_variance[k - 1])

        print(f"[PCA] Selected K={k} of {pcs.n_features} components "
              f"(covered variance={covered:.4f})")
        if pcs.degenerate:
            print("[PCA] Degenerate covariance, kept full rank")

        result = StageResult(stage_name=self.name)
        result.add_metric("n_components", k)
        result.add_metric("n_features", pcs.n_features)
        result.add_metric("covered_variance", covered)
        result.add_metric("threshold", threshold)
        result.add_metadata("degenerate", pcs.degenerate)
        result.add_metadata("train_reduced_shape", list(ctx.matrices["train_reduced"].shape))
        result.add_metadata("test_reduced_shape", list(ctx.matrices["test_reduced"].shape))
        result.add_artifact("rotation", rotation)
        result.add_artifact("cumulative_variance", pcs.cumulative_variance)

        if settings.get('report', True):
            report = generate_variance_report(
                pcs,
                threshold=threshold,
                n_components=k,
                out_dir=output_dir / "dimensionality",
                max_plot_components=max_plot,
            )
            result.add_artifact("report", report)

        if ctx.wandb_run:
            ctx.wandb_run.log({
                f"{self.name}/n_components": k,
                f"{self.name}/covered_variance": covered,
            })

        return result
