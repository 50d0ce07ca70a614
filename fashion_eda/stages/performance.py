"""Model comparison stage - train/test classification metrics."""

from pathlib import Path
from typing import Dict, Any, List, Sequence

import numpy as np
from tqdm import tqdm

from fashion_eda.core.analysis_types import PredictionSource
from fashion_eda.core.context import AnalysisContext, StageResult
from fashion_eda.internal.analyses.performance import (
    PerformanceEvaluator,
    PerformanceRecord,
    comparison_table,
    plot_comparison,
)


def load_predictions(path: Path) -> Dict[str, np.ndarray]:
    """Read ``train_pred`` / ``test_pred`` from a prediction archive."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Prediction archive not found: {path}")
    with np.load(path, allow_pickle=False) as data:
        missing = [k for k in ("train_pred", "test_pred") if k not in data.files]
        if missing:
            raise ValueError(f"Prediction archive {path} is missing keys: {missing}")
        return {
            "train_pred": np.asarray(data["train_pred"]).ravel(),
            "test_pred": np.asarray(data["test_pred"]).ravel(),
        }


class PerformanceStage:
    """Stage that evaluates every configured model and builds the comparison table.

    Settings:
        models: list of PredictionSource
        average: averaging policy, "macro" unless overridden
    """

    name = "performance"

    def is_enabled(self, settings: Dict[str, Any]) -> bool:
        return settings.get('enabled', True) and bool(settings.get('models'))

    def run(self, ctx: AnalysisContext, settings: Dict[str, Any], output_dir: Path) -> StageResult:
        sources: Sequence[PredictionSource] = settings.get('models', [])
        evaluator = PerformanceEvaluator(
            labels=ctx.label_map.codes,
            average=settings.get('average', 'macro'),
        )
        y_train = ctx.get_labels("train")
        y_test = ctx.get_labels("test")

        records: List[PerformanceRecord] = []
        for source in tqdm(sources, desc="Evaluating models", leave=False):
            preds = load_predictions(source.path)
            record = evaluator.evaluate(
                y_train,
                preds["train_pred"],
                y_test,
                preds["test_pred"],
                source.name,
                train_predictions=source.train_predictions,
            )
            records.append(record)
            print(f"[Performance] {record.model}: "
                  f"acc_train={record.accuracy_train:.3f}, acc_test={record.accuracy_test:.3f}, "
                  f"f1_train={record.f1_train:.3f}, f1_test={record.f1_test:.3f}")

        table = comparison_table(records)
        perf_dir = output_dir / "performance"
        perf_dir.mkdir(parents=True, exist_ok=True)
        table.to_csv(perf_dir / "comparison.csv")
        plot_comparison(table, perf_dir / "comparison.png")

        result = StageResult(stage_name=self.name)
        for record in records:
            for metric, value in record.metrics().items():
                result.add_metric(f"{record.model}/{metric}", value)
        result.add_metadata("average", evaluator.average)
        result.add_metadata("n_models", len(records))
        result.add_artifact("table", table)
        result.add_artifact("records", [r.to_dict() for r in records])

        if ctx.wandb_run:
            ctx.wandb_run.log({f"{self.name}/{k}": v for k, v in result.metrics.items()})

        return result
