"""Architecture style heuristics.

Each candidate style gets an independent score in [0, 1] computed from the
package names of the main source files. The winner is the arg-max; ties go
to whichever style comes first in ARCHITECTURE_PRIORITY.
"""

from dataclasses import dataclass, field

from stackprint.analyzers.confidence import ConfidenceCalculator, clamp
from stackprint.models.profile import ArchitectureType, FeatureStyle
from stackprint.models.source import ScanResult

# Tie-break order for the arg-max: earlier wins.
ARCHITECTURE_PRIORITY: tuple[ArchitectureType, ...] = (
    ArchitectureType.LAYERED,
    ArchitectureType.FEATURE,
    ArchitectureType.HEXAGONAL,
    ArchitectureType.CLEAN,
    ArchitectureType.MODULAR,
    ArchitectureType.FLAT,
)

LAYERED_PACKAGES = ("controller", "service", "repository", "entity", "dto", "model")
HEXAGONAL_MARKERS = ("domain", "application", "infrastructure", "adapter", "port")
CLEAN_SPECIFIC_MARKERS = ("usecase", "gateway", "presenter", "interactor")
CLEAN_SUPPORT_MARKERS = ("domain", "application", "infrastructure")
MODULAR_MARKERS = ("api", "internal", "module")

# Package segments that name a layer or a style marker, never a feature module
LAYER_NAMES = frozenset({
    "controller", "service", "repository", "entity", "dto", "mapper", "model",
    "exception", "config",
    "domain", "application", "infrastructure", "adapter", "port",
    "usecase", "gateway", "presenter", "interactor",
    "api", "internal", "module", "web", "persistence", "common",
})

# Above this many files a project is not considered flat
FLAT_MAX_FILES = 15


def split_package(package: str) -> list[str]:
    return package.split(".") if package else []


def contains_package_part(package: str, part: str) -> bool:
    return part in split_package(package)


def has_package_prefix(package: str, prefix: str) -> bool:
    return package == prefix or package.startswith(prefix + ".")


def _join(base: str, segment: str) -> str:
    return f"{base}.{segment}" if base else segment


def _count_markers(packages: list[str], markers: tuple[str, ...]) -> int:
    """Count how many markers appear as a segment of at least one package."""
    return sum(1 for m in markers if any(contains_package_part(p, m) for p in packages))


@dataclass
class ArchitectureDecision:
    """Outcome of architecture selection."""

    architecture: ArchitectureType
    confidence: float
    scores: dict[ArchitectureType, float] = field(default_factory=dict)
    feature_modules: list[str] = field(default_factory=list)
    feature_style: FeatureStyle | None = None


class ArchitectureDetector:
    """Scores every architecture style and picks the best one."""

    def __init__(self, calculator: ConfidenceCalculator | None = None) -> None:
        self.calculator = calculator if calculator is not None else ConfidenceCalculator()

    def detect(self, scan: ScanResult) -> ArchitectureDecision:
        """Select the architecture style of a scanned project.

        An empty project, or one where no style scores above zero, is
        layered with full confidence.
        """
        if not scan.main_files:
            return ArchitectureDecision(ArchitectureType.LAYERED, 1.0)

        scores = self.scores(scan)
        best = ARCHITECTURE_PRIORITY[0]
        for arch in ARCHITECTURE_PRIORITY[1:]:
            if scores[arch] > scores[best]:
                best = arch

        if scores[best] <= 0.0:
            return ArchitectureDecision(ArchitectureType.LAYERED, 1.0, scores)

        decision = ArchitectureDecision(best, scores[best], scores)
        if best == ArchitectureType.FEATURE:
            decision.feature_modules = self.feature_modules(scan)
            decision.feature_style = self.feature_style(scan, decision.feature_modules)
        return decision

    def scores(self, scan: ScanResult) -> dict[ArchitectureType, float]:
        """Score every style, keyed in priority order."""
        scorers = {
            ArchitectureType.LAYERED: self.layered_score,
            ArchitectureType.FEATURE: self.feature_score,
            ArchitectureType.HEXAGONAL: self.hexagonal_score,
            ArchitectureType.CLEAN: self.clean_score,
            ArchitectureType.MODULAR: self.modular_score,
            ArchitectureType.FLAT: self.flat_score,
        }
        return {arch: scorers[arch](scan) for arch in ARCHITECTURE_PRIORITY}

    def layered_score(self, scan: ScanResult) -> float:
        """Files sitting directly in <base>.controller, <base>.service, ..."""
        total = len(scan.main_files)
        if total == 0:
            return 0.0

        found_layers: set[str] = set()
        files_in_layers = 0
        for f in scan.main_files:
            for layer in LAYERED_PACKAGES:
                if has_package_prefix(f.package, _join(scan.base_package, layer)):
                    found_layers.add(layer)
                    files_in_layers += 1

        # Four canonical layers make a complete layered project
        layer_coverage = min(len(found_layers) / 4.0, 1.0)
        file_ratio = files_in_layers / total

        return self.calculator.calculate(
            (layer_coverage + file_ratio) / 2,
            total,
            layer_coverage,
        )

    def feature_score(self, scan: ScanResult) -> float:
        """Two or more feature modules, each mixing several file categories."""
        if not scan.base_package:
            return 0.0

        modules = self.feature_modules(scan)
        if len(modules) < 2:
            return 0.0

        diverse_modules = 0
        files_in_modules = 0
        for module in modules:
            prefix = _join(scan.base_package, module)
            module_files = [f for f in scan.main_files if has_package_prefix(f.package, prefix)]
            if len({f.file_type for f in module_files}) >= 2:
                diverse_modules += 1
            files_in_modules += len(module_files)

        has_common = any(
            has_package_prefix(f.package, _join(scan.base_package, "common"))
            for f in scan.main_files
        )

        module_quality = diverse_modules / len(modules)
        file_ratio = files_in_modules / len(scan.main_files)

        score = self.calculator.architecture(
            files_in_modules,
            len(scan.main_files),
            has_common,
            1.0 - module_quality,
        )
        if has_common:
            score += 0.05
        if module_quality > 0.7:
            score += 0.05

        return clamp(score * file_ratio + score * (1 - file_ratio) * 0.5)

    def hexagonal_score(self, scan: ScanResult) -> float:
        found = _count_markers(scan.unique_packages(), HEXAGONAL_MARKERS)
        if found < 2:
            return 0.0
        ratio = found / len(HEXAGONAL_MARKERS)
        return self.calculator.calculate(ratio, len(scan.main_files), ratio)

    def clean_score(self, scan: ScanResult) -> float:
        packages = scan.unique_packages()
        found_specific = _count_markers(packages, CLEAN_SPECIFIC_MARKERS)
        found_support = _count_markers(packages, CLEAN_SUPPORT_MARKERS)
        if found_specific < 1:
            return 0.0

        specific_ratio = found_specific / len(CLEAN_SPECIFIC_MARKERS)
        support_ratio = found_support / len(CLEAN_SUPPORT_MARKERS)
        combined = specific_ratio * 0.7 + support_ratio * 0.3

        score = self.calculator.calculate(combined, len(scan.main_files), combined)
        if found_specific >= 2:
            score += 0.15
        if found_support >= 2:
            score += 0.10
        return clamp(score)

    def modular_score(self, scan: ScanResult) -> float:
        found = _count_markers(scan.unique_packages(), MODULAR_MARKERS)
        if found < 2:
            return 0.0
        return self.calculator.calculate(
            found / len(MODULAR_MARKERS),
            len(scan.main_files),
            0.7,
        )

    def flat_score(self, scan: ScanResult) -> float:
        if len(scan.main_files) > FLAT_MAX_FILES:
            return 0.0
        if len(scan.unique_packages()) <= 2:
            return self.calculator.calculate(1.0, len(scan.main_files), 1.0)
        return 0.0

    def feature_modules(self, scan: ScanResult) -> list[str]:
        """First package segment past the base that is not a layer name."""
        if not scan.base_package:
            return []

        depth = len(split_package(scan.base_package))
        modules: set[str] = set()
        for f in scan.main_files:
            if not has_package_prefix(f.package, scan.base_package):
                continue
            parts = split_package(f.package)
            if len(parts) > depth and parts[depth] not in LAYER_NAMES:
                modules.add(parts[depth])
        return sorted(modules)

    def feature_style(self, scan: ScanResult, modules: list[str]) -> FeatureStyle:
        """Majority vote: files at a module's root (flat) vs. deeper (nested)."""
        if not modules:
            return FeatureStyle.NESTED

        flat_count = 0
        nested_count = 0
        for module in modules:
            prefix = _join(scan.base_package, module)
            for f in scan.main_files:
                if not has_package_prefix(f.package, prefix):
                    continue
                if f.package == prefix:
                    flat_count += 1
                else:
                    nested_count += 1

        return FeatureStyle.FLAT if flat_count > nested_count else FeatureStyle.NESTED
