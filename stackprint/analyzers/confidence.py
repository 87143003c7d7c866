"""Confidence scoring.

Turns raw evidence counts into a score in [0, 1]:

    confidence = signal * 0.40 + normalized_sample_size * 0.30 + consistency * 0.30

The sample size term saturates at OPTIMAL_SAMPLE_SIZE, so a strong signal
from a handful of files can never reach full confidence on its own.
Nothing here knows about Java; the architecture heuristics express their
domain rules as inputs to these formulas.
"""

# Thresholds
CONFIDENCE_HIGH = 0.85
CONFIDENCE_THRESHOLD = 0.70
CONFIDENCE_MEDIUM = 0.50
CONFIDENCE_LOW = 0.30

# Weights
WEIGHT_SIGNAL_STRENGTH = 0.40
WEIGHT_SAMPLE_SIZE = 0.30
WEIGHT_CONSISTENCY = 0.30

MIN_SAMPLE_SIZE = 3
OPTIMAL_SAMPLE_SIZE = 10

MARKER_BONUS = 0.10
AMBIGUITY_PENALTY = 0.15


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


class ConfidenceCalculator:
    """Stateless confidence arithmetic shared by every heuristic."""

    def calculate(self, signal_strength: float, sample_size: int, consistency: float) -> float:
        """Combine signal strength, sample size and consistency.

        Args:
            signal_strength: Fraction of evidence supporting the hypothesis.
            sample_size: Number of observations behind the signal.
            consistency: How uniform the evidence is.

        Returns:
            Confidence in [0, 1].
        """
        confidence = (
            signal_strength * WEIGHT_SIGNAL_STRENGTH
            + self.normalize_sample_size(sample_size) * WEIGHT_SAMPLE_SIZE
            + consistency * WEIGHT_CONSISTENCY
        )
        return clamp(confidence)

    def from_counts(self, match_count: int, total_count: int) -> float:
        """Confidence from a simple matches-out-of-total count."""
        if total_count == 0:
            return 0.0
        ratio = match_count / total_count
        return self.calculate(ratio, total_count, self._consistency_from_ratio(ratio))

    def architecture(
        self,
        matching_files: int,
        total_files: int,
        has_distinctive_markers: bool,
        ambiguity: float,
    ) -> float:
        """Confidence for an architecture hypothesis.

        Distinctive markers add MARKER_BONUS; ambiguity in [0, 1] lowers the
        consistency term and subtracts ambiguity * AMBIGUITY_PENALTY.
        """
        if total_files == 0:
            return 0.0

        base_ratio = matching_files / total_files
        confidence = self.calculate(base_ratio, total_files, 1.0 - ambiguity)
        if has_distinctive_markers:
            confidence += MARKER_BONUS
        confidence -= ambiguity * AMBIGUITY_PENALTY
        return clamp(confidence)

    def pattern(self, occurrences: int, sample_size: int, variations: int) -> float:
        """Confidence that a naming or coding pattern is the project norm.

        Every additional variation of the pattern divides consistency.
        """
        if sample_size == 0:
            return 0.0
        consistency = 1.0 / variations if variations > 1 else 1.0
        return self.calculate(occurrences / sample_size, sample_size, consistency)

    def normalize_sample_size(self, sample_size: int) -> float:
        if sample_size <= 0:
            return 0.0
        return min(sample_size / OPTIMAL_SAMPLE_SIZE, 1.0)

    @staticmethod
    def _consistency_from_ratio(ratio: float) -> float:
        if ratio >= 0.9:
            return 1.0
        if ratio >= 0.7:
            return 0.8
        if ratio >= 0.5:
            return 0.6
        return 0.4

    def is_high(self, confidence: float) -> bool:
        return confidence >= CONFIDENCE_HIGH

    def meets_threshold(self, confidence: float) -> bool:
        return confidence >= CONFIDENCE_THRESHOLD

    def needs_confirmation(self, confidence: float) -> bool:
        return CONFIDENCE_LOW <= confidence < CONFIDENCE_THRESHOLD

    def is_too_low(self, confidence: float) -> bool:
        return confidence < CONFIDENCE_LOW

    def level(self, confidence: float) -> str:
        """Name the band a confidence falls in."""
        if confidence >= CONFIDENCE_HIGH:
            return "high"
        if confidence >= CONFIDENCE_THRESHOLD:
            return "medium"
        if confidence >= CONFIDENCE_LOW:
            return "low"
        return "very_low"

    def compare(self, first: float, second: float) -> int:
        """Compare two confidences, treating gaps of 0.1 or less as a tie."""
        diff = first - second
        if diff > 0.1:
            return 1
        if diff < -0.1:
            return -1
        return 0

    def combine(self, *confidences: float) -> float:
        """Mean of the given confidences."""
        if not confidences:
            return 0.0
        return sum(confidences) / len(confidences)

    def weighted_combine(self, values: list[float], weights: list[float]) -> float:
        """Weighted mean; 0.0 for empty or mismatched inputs."""
        if not values or len(values) != len(weights):
            return 0.0
        total_weight = sum(weights)
        if total_weight == 0:
            return 0.0
        return sum(v * w for v, w in zip(values, weights, strict=True)) / total_weight

    def as_percentage(self, confidence: float) -> int:
        return int(confidence * 100)
