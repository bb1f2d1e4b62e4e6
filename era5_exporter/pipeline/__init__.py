"""Concurrent extract-batch-load pipeline."""

from .handoff import Handoff
from .orchestrator import ExportPipeline, PipelineResult, iter_chunks, run_pipeline
from .progress import ProgressAggregator

__all__ = [
    "Handoff",
    "ExportPipeline",
    "PipelineResult",
    "iter_chunks",
    "run_pipeline",
    "ProgressAggregator",
]
