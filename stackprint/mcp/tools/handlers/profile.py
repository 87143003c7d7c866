"""Profile detection handler."""

import asyncio
import json
from pathlib import Path
from typing import Any

from stackprint.analyzers.detector import Detector
from stackprint.models.profile import ArchitectureType, ProjectProfile
from stackprint.utils.cache import ProfileCache


async def handle_detect_profile(arguments: dict[str, Any]) -> str:
    """Handle detect_profile tool call.

    Without the cache, the profile and its scores share one scan. With the
    cache, scores are computed from the current sources.

    Args:
        arguments: Tool arguments with project_path, refresh, use_cache,
            include_scores.

    Returns:
        JSON string with the project profile.

    Raises:
        ValueError: If project_path is missing or not a directory.
    """
    project_path = arguments.get("project_path")
    if not project_path:
        raise ValueError("project_path is required")

    project = Path(project_path)
    if not project.is_dir():
        raise ValueError(f"Not a directory: {project_path}")

    refresh = bool(arguments.get("refresh", False))
    use_cache = bool(arguments.get("use_cache", True))
    include_scores = bool(arguments.get("include_scores", False))

    scores: dict[ArchitectureType, float] | None = None
    if use_cache:
        profile = await asyncio.to_thread(ProfileCache(project).load_or_detect, refresh)
        if include_scores:
            scores = await asyncio.to_thread(_architecture_scores, project)
    else:
        profile, detector_scores = await asyncio.to_thread(_detect_with_scores, project)
        if include_scores:
            scores = detector_scores

    result = json.loads(profile.model_dump_json())
    if scores is not None:
        result["scores"] = {arch.value: round(score, 4) for arch, score in scores.items()}
    return json.dumps(result, indent=2)


def _detect_with_scores(project: Path) -> tuple[ProjectProfile, dict[ArchitectureType, float]]:
    detector = Detector(project)
    profile = detector.detect()
    return profile, detector.scores()


def _architecture_scores(project: Path) -> dict[ArchitectureType, float]:
    return Detector(project).scores()
