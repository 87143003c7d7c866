"""Project profile model.

The ProjectProfile is the durable output of detection. Code generators read
it to decide where new files go and how they are written. Field names are the
on-disk contract of the profile cache: bump PROFILE_SCHEMA_VERSION whenever
a field is renamed or its meaning changes, so old caches are discarded
instead of being reinterpreted.
"""

from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

PROFILE_SCHEMA_VERSION = 1


class ArchitectureType(StrEnum):
    LAYERED = "layered"
    FEATURE = "feature"
    HEXAGONAL = "hexagonal"
    CLEAN = "clean"
    MODULAR = "modular"
    FLAT = "flat"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "ArchitectureType":
        """Parse a style name, accepting common aliases."""
        aliases = {
            "package-by-feature": cls.FEATURE,
            "ports-and-adapters": cls.HEXAGONAL,
            "modular-monolith": cls.MODULAR,
        }
        if value in aliases:
            return aliases[value]
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class FeatureStyle(StrEnum):
    """How a feature module lays out its files."""

    FLAT = "flat"  # base.user.UserController
    NESTED = "nested"  # base.user.controller.UserController


class DTONamingStyle(StrEnum):
    REQUEST_RESPONSE = "request_response"
    DTO_UPPER = "dto_upper"
    DTO_LOWER = "dto_lower"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "DTONamingStyle":
        aliases = {"DTO": cls.DTO_UPPER, "Dto": cls.DTO_LOWER}
        if value in aliases:
            return aliases[value]
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class MapperType(StrEnum):
    MAPSTRUCT = "mapstruct"
    MODELMAPPER = "modelmapper"
    MANUAL = "manual"
    NONE = "none"

    @classmethod
    def parse(cls, value: str) -> "MapperType":
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


class DatabaseType(StrEnum):
    JPA = "jpa"
    CASSANDRA = "cassandra"
    MONGO = "mongo"
    R2DBC = "r2dbc"
    MULTI = "multi"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "DatabaseType":
        if value == "mongodb":
            return cls.MONGO
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class SwaggerStyle(StrEnum):
    OPENAPI3 = "openapi3"
    SWAGGER2 = "swagger2"
    NONE = "none"


class ValidationStyle(StrEnum):
    JAKARTA = "jakarta"
    JAVAX = "javax"
    NONE = "none"


class BaseClassInfo(BaseModel):
    """A shared superclass, e.g. a BaseEntity every entity extends."""

    name: str = Field(description="Simple class name")
    package: str = Field(default="", description="Package, empty when the class was not scanned")
    full_path: str = Field(default="", description="Source path, empty when the class was not scanned")


class ExceptionInfo(BaseModel):
    name: str
    package: str = ""


class ExceptionProfile(BaseModel):
    has_global_handler: bool = False
    handler_package: str = ""
    custom_exceptions: list[ExceptionInfo] = Field(default_factory=list)


class LombokProfile(BaseModel):
    detected: bool = False
    use_data: bool = False
    use_builder: bool = False
    use_accessors: bool = False
    use_slf4j: bool = False
    use_required_args: bool = False
    use_all_args: bool = False
    use_no_args: bool = False


class TestProfile(BaseModel):
    __test__ = False  # not a pytest test class

    framework: str = "junit5"
    has_mockito: bool = False
    has_testcontainers: bool = False
    has_rest_assured: bool = False
    structure_mirror: bool = False


# Lock flag -> profile fields it protects from re-detection
LOCK_GROUPS: dict[str, tuple[str, ...]] = {
    "arch_locked": ("architecture", "arch_confidence", "feature_style", "feature_modules"),
    "dto_naming_locked": ("dto_naming",),
    "id_locked": ("id_type", "id_annotation"),
    "mapper_locked": ("mapper",),
    "database_locked": ("database",),
}

# Package layout per (architecture, feature style). "*" is the fallback for
# layers without a dedicated entry.
_LAYERED_LAYOUT = {"*": "{base}.{layer}"}
PACKAGE_LAYOUTS: dict[tuple[ArchitectureType, FeatureStyle | None], dict[str, str]] = {
    (ArchitectureType.LAYERED, None): _LAYERED_LAYOUT,
    (ArchitectureType.FEATURE, FeatureStyle.NESTED): {"*": "{base}.{resource}.{layer}"},
    (ArchitectureType.FEATURE, FeatureStyle.FLAT): {
        "dto": "{base}.{resource}.dto",
        "*": "{base}.{resource}",
    },
    (ArchitectureType.HEXAGONAL, None): {
        "controller": "{base}.adapter.in.web",
        "service": "{base}.application.service",
        "entity": "{base}.domain.model",
        "repository": "{base}.application.port.out",
        "dto": "{base}.adapter.in.web.dto",
        "mapper": "{base}.adapter.in.web.mapper",
        "*": "{base}.{layer}",
    },
    (ArchitectureType.CLEAN, None): {
        "controller": "{base}.infrastructure.web",
        "service": "{base}.application.usecase",
        "entity": "{base}.domain.entity",
        "repository": "{base}.application.gateway",
        "dto": "{base}.infrastructure.web.dto",
        "mapper": "{base}.infrastructure.web.mapper",
        "*": "{base}.{layer}",
    },
    (ArchitectureType.MODULAR, None): {"*": "{base}.{resource}.internal.{layer}"},
}


def _lower_first(s: str) -> str:
    return s[:1].lower() + s[1:]


def package_for(
    architecture: ArchitectureType,
    feature_style: FeatureStyle | None,
    base_package: str,
    resource: str,
    layer: str,
) -> str:
    """Compute the package a generated file belongs in.

    Args:
        architecture: Detected (or locked) architecture style.
        feature_style: Feature module layout; only consulted for feature style.
        base_package: Project base package.
        resource: Resource name, e.g. 'User'.
        layer: Layer name: controller, service, repository, entity, dto, mapper...

    Returns:
        Dotted package name.

    Examples:
        >>> package_for(ArchitectureType.HEXAGONAL, None, "com.x", "User", "repository")
        'com.x.application.port.out'
        >>> package_for(ArchitectureType.FEATURE, FeatureStyle.FLAT, "com.x", "User", "service")
        'com.x.user'
    """
    if architecture == ArchitectureType.FEATURE:
        style = FeatureStyle.FLAT if feature_style == FeatureStyle.FLAT else FeatureStyle.NESTED
        layout = PACKAGE_LAYOUTS[(architecture, style)]
    else:
        layout = PACKAGE_LAYOUTS.get((architecture, None), _LAYERED_LAYOUT)

    template = layout.get(layer, layout["*"])
    return template.format(base=base_package, resource=_lower_first(resource), layer=layer)


class ProjectProfile(BaseModel):
    """Detected conventions of a project."""

    schema_version: int = Field(default=PROFILE_SCHEMA_VERSION)
    detected_at: datetime = Field(default_factory=lambda: datetime.now(tz=None))
    project_root: str = Field(default="")

    # Architecture
    architecture: ArchitectureType = Field(default=ArchitectureType.UNKNOWN)
    arch_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    arch_locked: bool = Field(default=False)
    feature_style: FeatureStyle | None = Field(default=None)
    feature_modules: list[str] = Field(default_factory=list)

    # Layout
    base_package: str = Field(default="")
    source_root: str = Field(default="src/main/java")
    test_root: str = Field(default="src/test/java")

    # Conventions
    base_entity: BaseClassInfo | None = Field(default=None)
    dto_naming: DTONamingStyle = Field(default=DTONamingStyle.UNKNOWN)
    dto_naming_locked: bool = Field(default=False)
    controller_suffix: str = Field(default="Controller")
    service_suffix: str = Field(default="Service")
    id_type: str = Field(default="Long")
    id_annotation: str = Field(default="")
    id_locked: bool = Field(default=False)
    mapper: MapperType = Field(default=MapperType.NONE)
    mapper_locked: bool = Field(default=False)

    # Cross-cutting
    exceptions: ExceptionProfile = Field(default_factory=ExceptionProfile)
    lombok: LombokProfile = Field(default_factory=LombokProfile)
    has_swagger: bool = Field(default=False)
    swagger_style: SwaggerStyle = Field(default=SwaggerStyle.NONE)
    has_validation: bool = Field(default=False)
    validation_style: ValidationStyle = Field(default=ValidationStyle.NONE)
    testing: TestProfile = Field(default_factory=TestProfile)
    database: DatabaseType = Field(default=DatabaseType.UNKNOWN)
    database_locked: bool = Field(default=False)

    locked_fields: list[str] = Field(default_factory=list)

    @field_validator("detected_at")
    @classmethod
    def naive_local_time(cls, value: datetime) -> datetime:
        # Timestamps are naive local time; hand-edited "...Z" values are converted.
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @classmethod
    def empty(cls) -> "ProjectProfile":
        """A profile with nothing detected yet."""
        return cls()

    @classmethod
    def default(cls) -> "ProjectProfile":
        """Conventions assumed for a brand new Spring Boot project."""
        return cls(
            architecture=ArchitectureType.LAYERED,
            arch_confidence=1.0,
            dto_naming=DTONamingStyle.REQUEST_RESPONSE,
            mapper=MapperType.MANUAL,
            validation_style=ValidationStyle.JAKARTA,
            database=DatabaseType.JPA,
            id_annotation="@GeneratedValue(strategy = GenerationType.IDENTITY)",
            lombok=LombokProfile(detected=True, use_data=True, use_no_args=True, use_all_args=True),
            testing=TestProfile(has_mockito=True, structure_mirror=True),
        )

    def is_valid(self) -> bool:
        """A profile is usable once architecture and base package are known."""
        return self.architecture != ArchitectureType.UNKNOWN and self.base_package != ""

    def is_stale(self, max_age: timedelta) -> bool:
        return datetime.now(tz=None) - self.detected_at > max_age

    def is_field_locked(self, field_name: str) -> bool:
        return field_name in self.locked_fields

    def lock_field(self, field_name: str) -> None:
        if not self.is_field_locked(field_name):
            self.locked_fields.append(field_name)

    def unlock_field(self, field_name: str) -> None:
        if field_name in self.locked_fields:
            self.locked_fields.remove(field_name)

    def carry_locked_from(self, previous: "ProjectProfile") -> "ProjectProfile":
        """Return a copy of this profile keeping previous's locked values.

        Lock flags protect their field groups (LOCK_GROUPS); names listed in
        locked_fields protect the profile field of the same name.
        """
        update: dict[str, object] = {"locked_fields": list(previous.locked_fields)}
        for flag, fields in LOCK_GROUPS.items():
            if getattr(previous, flag):
                update[flag] = True
                for name in fields:
                    update[name] = getattr(previous, name)
        for name in previous.locked_fields:
            if name in type(self).model_fields:
                update[name] = getattr(previous, name)
        return self.model_copy(update=update, deep=True)

    def dto_request_suffix(self) -> str:
        match self.dto_naming:
            case DTONamingStyle.DTO_UPPER:
                return "DTO"
            case DTONamingStyle.DTO_LOWER:
                return "Dto"
            case _:
                return "Request"

    def dto_response_suffix(self) -> str:
        match self.dto_naming:
            case DTONamingStyle.DTO_UPPER:
                return "DTO"
            case DTONamingStyle.DTO_LOWER:
                return "Dto"
            case _:
                return "Response"

    def id_import(self) -> str:
        return "java.util.UUID" if self.id_type == "UUID" else ""

    def needs_base_entity_import(self) -> bool:
        return self.base_entity is not None and self.base_entity.package != ""

    def base_entity_import(self) -> str:
        if self.base_entity is None:
            return ""
        if not self.base_entity.package:
            return self.base_entity.name
        return f"{self.base_entity.package}.{self.base_entity.name}"

    def package_for(self, resource: str, layer: str) -> str:
        """Package for a generated file of the given resource and layer."""
        return package_for(
            self.architecture, self.feature_style, self.base_package, resource, layer
        )
