"""Secondary convention detectors.

Each function reads a ScanResult and returns one attribute of the project
profile. They are independent of one another and of the architecture
decision, so they can run in any order.
"""

from collections import Counter

from stackprint.models.markers import (
    ADVICE_MARKERS,
    LOMBOK_FLAGS,
    OPENAPI3_MARKERS,
    SWAGGER2_MARKERS,
    VALIDATION_MARKERS,
    Marker,
)
from stackprint.models.profile import (
    BaseClassInfo,
    DatabaseType,
    DTONamingStyle,
    ExceptionInfo,
    ExceptionProfile,
    LombokProfile,
    MapperType,
    SwaggerStyle,
    TestProfile,
    ValidationStyle,
)
from stackprint.models.source import FileType, ScanResult

UUID_ID_ANNOTATION = "@GeneratedValue(strategy = GenerationType.UUID)"
IDENTITY_ID_ANNOTATION = "@GeneratedValue(strategy = GenerationType.IDENTITY)"

# An entity set this small may establish a base class from a single reference
SMALL_ENTITY_SET = 3


def detect_base_entity(scan: ScanResult) -> BaseClassInfo | None:
    """Find the superclass most entities extend.

    Accepted with two or more references, or with one reference when the
    project has at most SMALL_ENTITY_SET entities.
    """
    entities = scan.files_of_type(FileType.ENTITY)
    if not entities:
        return None

    # Counter keeps first-seen order, so most_common breaks ties by it
    parent_counts = Counter(e.extends_class for e in entities if e.extends_class)
    if not parent_counts:
        return None

    best_parent, best_count = parent_counts.most_common(1)[0]
    if not (best_count >= 2 or (best_count == 1 and len(entities) <= SMALL_ENTITY_SET)):
        return None

    for f in scan.main_files:
        if f.class_name == best_parent:
            return BaseClassInfo(name=best_parent, package=f.package, full_path=f.path)
    return BaseClassInfo(name=best_parent)


def detect_dto_naming(scan: ScanResult) -> DTONamingStyle:
    """Majority vote over DTO suffixes; ties favour Request/Response, then DTO."""
    request_response = 0
    dto_upper = 0
    dto_lower = 0
    for dto in scan.files_of_type(FileType.DTO):
        name = dto.class_name
        if name.endswith(("Request", "Response")):
            request_response += 1
        elif name.endswith("DTO"):
            dto_upper += 1
        elif name.endswith("Dto"):
            dto_lower += 1

    if request_response >= dto_upper and request_response >= dto_lower:
        return DTONamingStyle.REQUEST_RESPONSE
    if dto_upper >= dto_lower:
        return DTONamingStyle.DTO_UPPER
    return DTONamingStyle.DTO_LOWER


def detect_controller_suffix(scan: ScanResult) -> str:
    resource_count = 0
    controller_count = 0
    for controller in scan.files_of_type(FileType.CONTROLLER):
        if controller.class_name.endswith("Resource"):
            resource_count += 1
        elif controller.class_name.endswith("Controller"):
            controller_count += 1
    return "Resource" if resource_count > controller_count else "Controller"


def detect_id_type(scan: ScanResult) -> tuple[str, str]:
    """Detect the entity ID type and its generation annotation.

    Returns:
        Tuple of (id_type, id_annotation). Without entities the annotation
        is left empty.
    """
    entities = scan.files_of_type(FileType.ENTITY)
    if not entities:
        return "Long", ""

    if any(imp.endswith("UUID") for e in entities for imp in e.imports):
        return "UUID", UUID_ID_ANNOTATION
    return "Long", IDENTITY_ID_ANNOTATION


def detect_mapper(scan: ScanResult) -> MapperType:
    if scan.files_with_marker(Marker.MAPPER):
        return MapperType.MAPSTRUCT

    imports = [imp for f in scan.main_files for imp in f.imports]
    if any("mapstruct" in imp for imp in imports):
        return MapperType.MAPSTRUCT
    if any("modelmapper" in imp for imp in imports):
        return MapperType.MODELMAPPER

    return MapperType.MANUAL


def detect_lombok(scan: ScanResult) -> LombokProfile:
    flags: dict[str, bool] = {}
    for f in scan.main_files:
        for marker in f.markers:
            flag = LOMBOK_FLAGS.get(marker)
            if flag is not None:
                flags[flag] = True
    return LombokProfile(detected=bool(flags), **flags)


def detect_exceptions(scan: ScanResult) -> ExceptionProfile:
    profile = ExceptionProfile()
    for f in scan.files_of_type(FileType.EXCEPTION):
        if f.has_marker(*ADVICE_MARKERS):
            profile.has_global_handler = True
            profile.handler_package = f.package
        if f.class_name.endswith("Exception"):
            profile.custom_exceptions.append(ExceptionInfo(name=f.class_name, package=f.package))
    return profile


def detect_swagger(scan: ScanResult) -> SwaggerStyle:
    """Detect the API documentation style from the first conclusive file."""
    for f in scan.main_files:
        for imp in f.imports:
            if "io.swagger.v3" in imp or "springdoc" in imp:
                return SwaggerStyle.OPENAPI3
            if "io.swagger" in imp and "v3" not in imp:
                return SwaggerStyle.SWAGGER2

        for marker in f.markers:
            if marker in OPENAPI3_MARKERS:
                return SwaggerStyle.OPENAPI3
            if marker in SWAGGER2_MARKERS:
                return SwaggerStyle.SWAGGER2

    return SwaggerStyle.NONE


def detect_validation(scan: ScanResult) -> ValidationStyle:
    for f in scan.main_files:
        for imp in f.imports:
            if "jakarta.validation" in imp:
                return ValidationStyle.JAKARTA
            if "javax.validation" in imp:
                return ValidationStyle.JAVAX

        if any(marker in VALIDATION_MARKERS for marker in f.markers):
            return ValidationStyle.JAKARTA

    return ValidationStyle.NONE


def detect_database(scan: ScanResult) -> DatabaseType:
    """Detect the persistence technology.

    More than one technology in use resolves to MULTI. A project with no
    persistence evidence is assumed to use JPA.
    """
    found: set[DatabaseType] = set()
    for f in scan.main_files:
        for marker in f.markers:
            if marker in (Marker.ENTITY, Marker.TABLE):
                found.add(DatabaseType.JPA)
            elif marker == Marker.DOCUMENT:
                found.add(DatabaseType.MONGO)

        for imp in f.imports:
            if "cassandra" in imp:
                found.add(DatabaseType.CASSANDRA)
            if "r2dbc" in imp:
                found.add(DatabaseType.R2DBC)
            if "mongodb" in imp:
                found.add(DatabaseType.MONGO)

        for iface in f.implements:
            if "CassandraRepository" in iface:
                found.add(DatabaseType.CASSANDRA)
            if "MongoRepository" in iface:
                found.add(DatabaseType.MONGO)
            if "R2dbcRepository" in iface or "ReactiveCrudRepository" in iface:
                found.add(DatabaseType.R2DBC)

    if len(found) > 1:
        return DatabaseType.MULTI
    for database in (DatabaseType.R2DBC, DatabaseType.MONGO, DatabaseType.CASSANDRA):
        if database in found:
            return database
    return DatabaseType.JPA


def detect_testing(scan: ScanResult) -> TestProfile:
    profile = TestProfile(framework="junit5")
    for f in scan.test_files:
        for imp in f.imports:
            if "mockito" in imp:
                profile.has_mockito = True
            if "testcontainers" in imp:
                profile.has_testcontainers = True
            if "rest-assured" in imp or "restassured" in imp:
                profile.has_rest_assured = True
        if f.has_marker(Marker.TESTCONTAINERS):
            profile.has_testcontainers = True

    profile.structure_mirror = detect_test_structure_mirror(scan)
    return profile


def detect_test_structure_mirror(scan: ScanResult) -> bool:
    """Whether most test files live in a package that also exists in main."""
    if not scan.test_files or not scan.main_files:
        return True

    main_packages = {f.package for f in scan.main_files}
    matching = sum(1 for f in scan.test_files if f.package in main_packages)
    return matching / len(scan.test_files) > 0.5
