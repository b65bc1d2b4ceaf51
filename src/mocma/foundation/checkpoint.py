"""
Checkpointing utilities for saving and resuming optimization runs.
"""

from __future__ import annotations

import pickle
from pathlib import Path
from typing import Any, TYPE_CHECKING, cast

from mocma.foundation.exceptions import CheckpointError

if TYPE_CHECKING:
    from numpy.random import Generator

CHECKPOINT_VERSION = 1


def save_checkpoint(
    path: str | Path,
    *,
    optimizer_state: dict[str, Any],
    rng_state: dict[str, Any] | None = None,
    extra: dict[str, Any] | None = None,
) -> Path:
    """
    Save optimizer state to a checkpoint file.

    Args:
        path: File path for checkpoint (will add .ckpt extension if missing).
        optimizer_state: Output of ``MOCMA.state_dict()`` (config, population, counters).
        rng_state: RNG state from ``rng.bit_generator.state`` (optional).
        extra: Additional caller state (optional).

    Returns:
        Path to saved checkpoint file.
    """
    path = Path(path)
    if not path.suffix:
        path = path.with_suffix(".ckpt")

    path.parent.mkdir(parents=True, exist_ok=True)

    checkpoint = {
        "version": CHECKPOINT_VERSION,
        "optimizer": optimizer_state,
        "rng_state": rng_state,
        "extra": extra or {},
    }

    with open(path, "wb") as f:
        pickle.dump(checkpoint, f, protocol=pickle.HIGHEST_PROTOCOL)

    return path


def load_checkpoint(path: str | Path) -> dict[str, Any]:
    """
    Load optimizer state from a checkpoint file.

    Args:
        path: Path to checkpoint file.

    Returns:
        Dictionary with keys ``optimizer``, ``rng_state`` (may be None) and ``extra``.

    Raises:
        FileNotFoundError: If checkpoint file doesn't exist.
        CheckpointError: If the file is not a checkpoint or its version is unsupported.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Checkpoint not found: {path}")

    with open(path, "rb") as f:
        try:
            checkpoint = pickle.load(f)
        except (pickle.UnpicklingError, EOFError) as exc:
            raise CheckpointError(f"Failed to read checkpoint: {exc}", path=str(path)) from exc

    if not isinstance(checkpoint, dict) or "optimizer" not in checkpoint:
        raise CheckpointError("File does not contain an optimizer checkpoint.", path=str(path))

    version = checkpoint.get("version", 0)
    if version != CHECKPOINT_VERSION:
        raise CheckpointError(f"Unsupported checkpoint version: {version}", path=str(path))

    return cast(dict[str, Any], checkpoint)


def restore_rng(rng: "Generator", state: dict[str, Any]) -> None:
    """
    Restore RNG state from checkpoint.

    Args:
        rng: NumPy random generator to restore.
        state: State dict from checkpoint['rng_state'].
    """
    rng.bit_generator.state = state


__all__ = ["CHECKPOINT_VERSION", "save_checkpoint", "load_checkpoint", "restore_rng"]
