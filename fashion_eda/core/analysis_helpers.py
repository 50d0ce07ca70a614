"""Helper functions shared by the dataset manager and the pipeline."""

from typing import Optional, Any

import numpy as np


def maybe_init_wandb(
    use_wandb: bool,
    project: Optional[str] = None,
    run_name: Optional[str] = None
) -> Optional[Any]:
    """Initialize WandB if enabled.

    Args:
        use_wandb: Whether to use WandB
        project: WandB project name
        run_name: WandB run name

    Returns:
        WandB run object or None
    """
    if not use_wandb:
        return None

    try:
        import wandb
        return wandb.init(project=project, name=run_name)
    except ImportError:
        print("⚠️  WandB not installed, skipping logging")
        return None


def flatten_images(images: np.ndarray) -> np.ndarray:
    """Flatten an image batch to one row per sample.

    Args:
        images: Array [N, H, W], [N, H, W, C], [N, C, H, W] or already [N, D]

    Returns:
        Array of shape (N, D)
    """
    images = np.asarray(images)
    if images.ndim < 2:
        raise ValueError(f"Unexpected image batch shape: {images.shape}")
    return images.reshape(images.shape[0], -1)


def normalize_pixels(features: np.ndarray) -> np.ndarray:
    """Scale integer pixel intensities into [0, 1].

    Integer arrays holding 8-bit values are divided by 255, wider ones by
    their dtype maximum. Float arrays are assumed to be normalized already.
    """
    features = np.asarray(features)
    if np.issubdtype(features.dtype, np.integer):
        if features.size and features.min() < 0:
            raise ValueError("Pixel intensities must be non-negative")
        fits_8bit = features.size == 0 or features.max() <= 255
        scale = 255.0 if fits_8bit else float(np.iinfo(features.dtype).max)
        return features.astype(np.float64) / scale
    return features.astype(np.float64, copy=False)
