"""Source file classification.

Maps the lexical facts of a file to a FileType. Evidence is considered in a
fixed order: a recognised annotation marker beats an implemented interface
name containing 'Repository', which beats a class name suffix. Annotations
always outrank names, so '@Entity class FooController' is an entity.
"""

from collections.abc import Sequence

from stackprint.models.markers import Marker, parse_marker
from stackprint.models.source import FileType

# Marker -> category. Markers missing here (Lombok, validation, ...) carry
# no classification evidence.
MARKER_FILE_TYPES: dict[Marker, FileType] = {
    Marker.REST_CONTROLLER: FileType.CONTROLLER,
    Marker.CONTROLLER: FileType.CONTROLLER,
    Marker.SERVICE: FileType.SERVICE,
    Marker.REPOSITORY: FileType.REPOSITORY,
    Marker.ENTITY: FileType.ENTITY,
    Marker.DOCUMENT: FileType.ENTITY,
    Marker.TABLE: FileType.ENTITY,
    Marker.MAPPER: FileType.MAPPER,
    Marker.CONFIGURATION: FileType.CONFIG,
    Marker.COMPONENT: FileType.CONFIG,
    Marker.BEAN: FileType.CONFIG,
    Marker.CONTROLLER_ADVICE: FileType.EXCEPTION,
    Marker.REST_CONTROLLER_ADVICE: FileType.EXCEPTION,
}

# Checked in order; the first matching suffix group wins.
NAME_SUFFIXES: list[tuple[tuple[str, ...], FileType]] = [
    (("Controller", "Resource"), FileType.CONTROLLER),
    (("Service", "ServiceImpl"), FileType.SERVICE),
    (("Repository",), FileType.REPOSITORY),
    (("Entity",), FileType.ENTITY),
    (("Mapper",), FileType.MAPPER),
    (("Exception",), FileType.EXCEPTION),
    (("Config", "Configuration"), FileType.CONFIG),
    (("Request", "Response", "DTO", "Dto"), FileType.DTO),
]


def classify(
    class_name: str,
    annotations: Sequence[str] = (),
    interfaces: Sequence[str] = (),
) -> FileType:
    """Classify a main-source file.

    Args:
        class_name: Primary type name.
        annotations: Annotation names in source order.
        interfaces: Implemented or extended interface names.

    Returns:
        The file's category, FileType.UNKNOWN when nothing matches.
    """
    for annotation in annotations:
        file_type = MARKER_FILE_TYPES.get(parse_marker(annotation))
        if file_type is not None:
            return file_type

    if any("Repository" in iface for iface in interfaces):
        return FileType.REPOSITORY

    for suffixes, file_type in NAME_SUFFIXES:
        if class_name.endswith(suffixes):
            return file_type

    return FileType.UNKNOWN
