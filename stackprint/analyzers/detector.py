"""Project convention detection.

Runs the pipeline scan -> classify -> score -> attribute-detect and returns a
fresh ProjectProfile. Nothing is cached here; see stackprint.utils.cache for
the persisted profile.
"""

import logging
from pathlib import Path

from stackprint.analyzers import conventions
from stackprint.analyzers.architecture import ArchitectureDecision, ArchitectureDetector
from stackprint.analyzers.scanner import Scanner
from stackprint.fs import FileSystem
from stackprint.logging import log_operation
from stackprint.models.profile import (
    ArchitectureType,
    ProjectProfile,
    SwaggerStyle,
    ValidationStyle,
)
from stackprint.models.source import ScanResult


class Detector:
    """Detects the conventions of one project.

    Attributes:
        scanner: Scanner bound to the project and filesystem.
        architecture: Architecture heuristics.
        last_scan: ScanResult of the most recent detect() call.
        last_decision: Architecture decision of the most recent detect() call.
    """

    def __init__(
        self,
        project_dir: Path | str,
        fs: FileSystem | None = None,
        source_root: str | None = None,
        test_root: str | None = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.scanner = Scanner(self.project_dir, fs=fs, source_root=source_root, test_root=test_root)
        self.architecture = ArchitectureDetector()
        self.last_scan: ScanResult | None = None
        self.last_decision: ArchitectureDecision | None = None

    def detect(self) -> ProjectProfile:
        """Scan the project and build its profile.

        Raises:
            ScanError: If a source root exists but cannot be walked.
        """
        with log_operation("detect", {"project": self.project_dir}, level=logging.DEBUG):
            scan = self.scanner.scan()
            decision = self.architecture.detect(scan)
            self.last_scan = scan
            self.last_decision = decision
            return self.build_profile(scan, decision)

    def scores(self) -> dict[ArchitectureType, float]:
        """Per-style scores of the most recent detection, scanning if needed."""
        if self.last_scan is None:
            self.detect()
        assert self.last_scan is not None
        return self.architecture.scores(self.last_scan)

    def build_profile(self, scan: ScanResult, decision: ArchitectureDecision) -> ProjectProfile:
        """Assemble a profile from a scan and its architecture decision."""
        profile = ProjectProfile.empty()
        profile.project_root = str(self.project_dir)
        profile.base_package = scan.base_package
        profile.source_root = scan.source_root
        profile.test_root = scan.test_root

        profile.architecture = decision.architecture
        profile.arch_confidence = decision.confidence
        profile.feature_modules = list(decision.feature_modules)
        profile.feature_style = decision.feature_style

        profile.base_entity = conventions.detect_base_entity(scan)
        profile.dto_naming = conventions.detect_dto_naming(scan)
        profile.controller_suffix = conventions.detect_controller_suffix(scan)
        profile.id_type, profile.id_annotation = conventions.detect_id_type(scan)
        profile.mapper = conventions.detect_mapper(scan)
        profile.lombok = conventions.detect_lombok(scan)
        profile.exceptions = conventions.detect_exceptions(scan)

        profile.swagger_style = conventions.detect_swagger(scan)
        profile.has_swagger = profile.swagger_style != SwaggerStyle.NONE
        profile.validation_style = conventions.detect_validation(scan)
        profile.has_validation = profile.validation_style != ValidationStyle.NONE

        profile.database = conventions.detect_database(scan)
        profile.testing = conventions.detect_testing(scan)
        return profile


def detect(
    project_root: Path | str,
    fs: FileSystem | None = None,
    source_root: str | None = None,
    test_root: str | None = None,
) -> ProjectProfile:
    """Detect the conventions of a project.

    Args:
        project_root: Project directory (the one holding src/main/java).
        fs: Filesystem to read through. Defaults to the real filesystem.
        source_root: Main source root relative to the project.
            Defaults to STACKPRINT_SOURCE_ROOT or src/main/java.
        test_root: Test source root relative to the project.
            Defaults to STACKPRINT_TEST_ROOT or src/test/java.

    Returns:
        A freshly detected ProjectProfile.

    Raises:
        ScanError: If a source root exists but cannot be walked.
    """
    return Detector(project_root, fs=fs, source_root=source_root, test_root=test_root).detect()
