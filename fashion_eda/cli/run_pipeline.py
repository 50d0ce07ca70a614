"""
Simple CLI for running the fashion_eda analysis pipeline.

Example:
    fashion-eda --config examples/configs/sample_analysis.yaml --set dimensionality.threshold=0.99
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

import yaml
from omegaconf import OmegaConf

from fashion_eda.core.analysis_types import ExperimentSpec, AnalysisSettings
from fashion_eda.pipeline import run_analysis_pipeline


def _load_config(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        if path.suffix in {".yaml", ".yml"}:
            return yaml.safe_load(f) or {}
        if path.suffix == ".json":
            return json.load(f)
        raise ValueError(f"Unsupported config format: {path.suffix}")


def _apply_overrides(cfg: Dict[str, Any], overrides: List[str]) -> Dict[str, Any]:
    """Merge ``key=value`` dotlist overrides into the loaded config."""
    if not overrides:
        return cfg
    merged = OmegaConf.merge(OmegaConf.create(cfg), OmegaConf.from_dotlist(overrides))
    return OmegaConf.to_container(merged, resolve=True)  # type: ignore[return-value]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run fashion_eda analysis pipeline.")
    parser.add_argument(
        "--config",
        required=True,
        type=Path,
        help="Path to YAML/JSON configuration file.",
    )
    parser.add_argument(
        "--output-root",
        type=Path,
        help="Override the output root directory defined in the config.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Override the random seed defined in the config.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a config entry, e.g. dimensionality.threshold=0.99 (repeatable).",
    )
    parser.add_argument(
        "--use-wandb",
        action="store_true",
        help="Enable Weights & Biases logging (requires wandb to be installed).",
    )
    parser.add_argument(
        "--wandb-project",
        type=str,
        default=None,
        help="Weights & Biases project name (optional).",
    )
    parser.add_argument(
        "--wandb-run-name",
        type=str,
        default=None,
        help="Weights & Biases run name (optional).",
    )
    return parser


def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    cfg = _apply_overrides(_load_config(args.config), args.overrides)

    seed = args.seed if args.seed is not None else cfg.get("seed", 42)
    project_root = args.config.parent.resolve()

    if args.output_root:
        output_root = args.output_root
    else:
        raw_output = Path(cfg.get("output_root", "results/analysis"))
        output_root = raw_output if raw_output.is_absolute() else (project_root / raw_output)
    use_wandb = args.use_wandb or bool(cfg.get("use_wandb", False))
    wandb_project = args.wandb_project or cfg.get("wandb_project")
    wandb_run_name = args.wandb_run_name

    settings = AnalysisSettings.from_cfg(cfg, project_root)

    experiment_cfg = cfg.get("experiment")
    if not experiment_cfg:
        raise ValueError("No experiment specified in configuration file.")

    spec = ExperimentSpec.from_config(experiment_cfg, project_root)
    run_analysis_pipeline(
        spec=spec,
        settings=settings,
        output_root=output_root,
        seed=seed,
        use_wandb=use_wandb,
        wandb_project=wandb_project,
        wandb_run_name=wandb_run_name,
    )


if __name__ == "__main__":
    main()
