"""Data models for scan results and project profiles."""

from stackprint.models.markers import Marker, parse_marker
from stackprint.models.profile import (
    PROFILE_SCHEMA_VERSION,
    ArchitectureType,
    BaseClassInfo,
    DatabaseType,
    DTONamingStyle,
    ExceptionInfo,
    ExceptionProfile,
    FeatureStyle,
    LombokProfile,
    MapperType,
    ProjectProfile,
    SwaggerStyle,
    TestProfile,
    ValidationStyle,
    package_for,
)
from stackprint.models.source import FileType, ScanResult, SourceFile

__all__ = [
    "PROFILE_SCHEMA_VERSION",
    "ArchitectureType",
    "BaseClassInfo",
    "DTONamingStyle",
    "DatabaseType",
    "ExceptionInfo",
    "ExceptionProfile",
    "FeatureStyle",
    "FileType",
    "LombokProfile",
    "MapperType",
    "Marker",
    "ProjectProfile",
    "ScanResult",
    "SourceFile",
    "SwaggerStyle",
    "TestProfile",
    "ValidationStyle",
    "package_for",
    "parse_marker",
]
