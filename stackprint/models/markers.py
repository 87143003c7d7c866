"""Annotation markers recognised by the profiler.

Every annotation name read from source text is parsed into a Marker. Names
the profiler has no rule for become Marker.UNRECOGNIZED, so each consumer
works over a closed set of cases instead of free-form strings.
"""

from enum import StrEnum


class Marker(StrEnum):
    """Annotation kinds that carry evidence about project conventions."""

    # Stereotypes
    REST_CONTROLLER = "RestController"
    CONTROLLER = "Controller"
    SERVICE = "Service"
    REPOSITORY = "Repository"
    COMPONENT = "Component"
    CONFIGURATION = "Configuration"
    BEAN = "Bean"
    CONTROLLER_ADVICE = "ControllerAdvice"
    REST_CONTROLLER_ADVICE = "RestControllerAdvice"
    MAPPER = "Mapper"

    # Persistence
    ENTITY = "Entity"
    TABLE = "Table"
    DOCUMENT = "Document"
    MAPPED_SUPERCLASS = "MappedSuperclass"

    # Lombok
    DATA = "Data"
    BUILDER = "Builder"
    GETTER = "Getter"
    SETTER = "Setter"
    SLF4J = "Slf4j"
    REQUIRED_ARGS_CONSTRUCTOR = "RequiredArgsConstructor"
    ALL_ARGS_CONSTRUCTOR = "AllArgsConstructor"
    NO_ARGS_CONSTRUCTOR = "NoArgsConstructor"

    # API documentation
    OPERATION = "Operation"
    TAG = "Tag"
    API_RESPONSE = "ApiResponse"
    API = "Api"
    API_OPERATION = "ApiOperation"

    # Bean validation
    VALID = "Valid"
    NOT_NULL = "NotNull"
    NOT_BLANK = "NotBlank"
    SIZE = "Size"

    # Testing
    TESTCONTAINERS = "Testcontainers"

    UNRECOGNIZED = "<unrecognized>"

    @classmethod
    def _missing_(cls, value: object) -> "Marker":
        return cls.UNRECOGNIZED


def parse_marker(annotation: str) -> Marker:
    """Parse an annotation name (without '@') into a Marker.

    Qualified names such as 'jakarta.persistence.Entity' are reduced to their
    simple name first.

    Args:
        annotation: Annotation name as written in source.

    Returns:
        The matching Marker, or Marker.UNRECOGNIZED.
    """
    simple = annotation.rsplit(".", 1)[-1]
    return Marker(simple)


# Markers that identify a web layer handler
CONTROLLER_MARKERS = frozenset({Marker.REST_CONTROLLER, Marker.CONTROLLER})

# Markers that identify a global exception handler
ADVICE_MARKERS = frozenset({Marker.CONTROLLER_ADVICE, Marker.REST_CONTROLLER_ADVICE})

# OpenAPI 3 (swagger-annotations v3 / springdoc) vs. Swagger 2 (springfox)
OPENAPI3_MARKERS = frozenset({Marker.OPERATION, Marker.TAG, Marker.API_RESPONSE})
SWAGGER2_MARKERS = frozenset({Marker.API, Marker.API_OPERATION})

VALIDATION_MARKERS = frozenset({Marker.VALID, Marker.NOT_NULL, Marker.NOT_BLANK, Marker.SIZE})

# Lombok annotation -> LombokProfile flag it sets
LOMBOK_FLAGS: dict[Marker, str] = {
    Marker.DATA: "use_data",
    Marker.BUILDER: "use_builder",
    Marker.GETTER: "use_accessors",
    Marker.SETTER: "use_accessors",
    Marker.SLF4J: "use_slf4j",
    Marker.REQUIRED_ARGS_CONSTRUCTOR: "use_required_args",
    Marker.ALL_ARGS_CONSTRUCTOR: "use_all_args",
    Marker.NO_ARGS_CONSTRUCTOR: "use_no_args",
}
