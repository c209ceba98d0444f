"""Artifact discovery, export and completeness checks."""

from .classifier import OutputClassifier, check_completeness, create_output_classifier
from .collector import ArtifactCollector, create_artifact_collector
from .layout import android_output_root, ios_output_candidate_dirs, ios_output_dirs
from .models import ArtifactKind, ArtifactRecord, CollectedOutputs, ExportResult


__all__ = [
    "ArtifactCollector",
    "ArtifactKind",
    "ArtifactRecord",
    "CollectedOutputs",
    "ExportResult",
    "OutputClassifier",
    "android_output_root",
    "check_completeness",
    "create_artifact_collector",
    "create_output_classifier",
    "ios_output_candidate_dirs",
    "ios_output_dirs",
]
