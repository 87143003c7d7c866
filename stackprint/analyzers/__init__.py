"""Analyzers that turn Java source text into a project profile."""

from stackprint.analyzers.architecture import ArchitectureDecision, ArchitectureDetector
from stackprint.analyzers.classifier import classify
from stackprint.analyzers.confidence import ConfidenceCalculator
from stackprint.analyzers.detector import Detector, detect
from stackprint.analyzers.scanner import Scanner, detect_base_package, parse_source

__all__ = [
    "ArchitectureDecision",
    "ArchitectureDetector",
    "ConfidenceCalculator",
    "Detector",
    "Scanner",
    "classify",
    "detect",
    "detect_base_package",
    "parse_source",
]
