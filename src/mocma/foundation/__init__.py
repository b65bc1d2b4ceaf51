"""Shared building blocks: errors, logging, checkpoints, metrics, problems, evaluation."""
