"""Base stage protocol for analysis pipeline."""

from typing import Protocol, Dict, Any, List, Optional
from pathlib import Path

from fashion_eda.core.context import AnalysisContext, StageResult


class BaseStage(Protocol):
    """Protocol for analysis stages.

    Each stage:
    - Has a name
    - Takes context (AnalysisContext) and settings
    - Runs analysis
    - Produces outputs (plots, tables) and a StageResult
    """

    name: str

    def run(self, ctx: AnalysisContext, settings: Dict[str, Any], output_dir: Path) -> StageResult:
        """Run the analysis stage.

        Args:
            ctx: AnalysisContext with matrices, labels, label map
            settings: Config dict for this stage
            output_dir: Where to save outputs
        """
        ...

    def is_enabled(self, settings: Dict[str, Any]) -> bool:
        """Check if this stage should run based on config."""
        ...


class StageRegistry:
    """Registry for managing analysis stages."""

    def __init__(self):
        self._stages: Dict[str, BaseStage] = {}

    def register(self, stage: BaseStage) -> None:
        """Register a stage."""
        self._stages[stage.name] = stage

    def get(self, name: str) -> Optional[BaseStage]:
        """Get stage by name."""
        return self._stages.get(name)

    @property
    def names(self) -> List[str]:
        return list(self._stages.keys())

    def run_all(self, ctx: AnalysisContext, settings: Any, output_dir: Path) -> List[StageResult]:
        """Run all enabled stages in registration order."""
        results: List[StageResult] = []
        for stage in self._stages.values():
            stage_settings = getattr(settings, stage.name, {})
            if stage.is_enabled(stage_settings):
                print(f"\n{'='*60}")
                print(f"Running: {stage.name}")
                print(f"{'='*60}")
                results.append(stage.run(ctx, stage_settings, output_dir))
        return results
