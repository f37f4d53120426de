"""XML component description loader.

Reads the Circuit Diagram component format::

    <component version="1.2" xmlns="http://schemas.circuit-diagram.org/...">
      <declaration>
        <meta name="name" value="Resistor" />
        <meta name="author" value="Circuit Diagram" />
        <meta name="guid" value="dab6bd6e-..." />
        <meta name="org.example.category" value="Passive" />
      </declaration>
      <configurations>
        <configuration name="Variable" implements="..." />
      </configurations>
      ...
    </component>

Only the declaration and configurations are interpreted here; connections
and render instructions are left to the generators, which receive the
original bytes.
"""

from __future__ import annotations

import logging
import uuid
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

from cdcc.ingest.base import BaseDescriptionLoader
from cdcc.types import ComponentConfiguration, Description, LoadIssue, LoadResult

if TYPE_CHECKING:
    from typing import BinaryIO

__all__ = ["XmlDescriptionLoader"]

logger = logging.getLogger(__name__)

# DTD constructs that indicate potentially unsafe XML (XXE attack vectors)
_UNSAFE_XML_PATTERNS = (b"<!DOCTYPE", b"<!ENTITY")

_KNOWN_VERSIONS = frozenset({"1.0", "1.1", "1.2"})
_IDENTITY_KEYS = frozenset({"name", "author", "guid", "additionalinformation"})


def _local(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _meta_value(element: ET.Element) -> str:
    value = element.get("value")
    if value is None:
        value = (element.text or "").strip()
    return value


class XmlDescriptionLoader(BaseDescriptionLoader):
    """Loader for XML component descriptions.

    Parsing uses the standard library ``ElementTree``. Documents that
    declare a DTD are rejected before parsing.
    """

    MAX_FILE_SIZE: int = 16 * 1024 * 1024  # 16 MB

    def supported_extensions(self) -> frozenset[str]:
        return frozenset({".xml"})

    def load(self, stream: BinaryIO) -> LoadResult:
        data = stream.read(self.MAX_FILE_SIZE + 1)
        if len(data) > self.MAX_FILE_SIZE:
            return self._fail(
                LoadIssue(f"Document exceeds maximum size ({self.MAX_FILE_SIZE} bytes)")
            )

        for pattern in _UNSAFE_XML_PATTERNS:
            if pattern in data:
                return self._fail(
                    LoadIssue(f"Document contains potentially unsafe XML ({pattern.decode()})")
                )

        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            line = e.position[0] if e.position else None
            return self._fail(LoadIssue(f"Malformed XML: {e}", line=line))

        if _local(root.tag) != "component":
            return self._fail(
                LoadIssue(f"Root element must be <component>, found <{_local(root.tag)}>")
            )

        return self._read_component(root)

    def _read_component(self, root: ET.Element) -> LoadResult:
        errors: list[LoadIssue] = []
        warnings: list[LoadIssue] = []

        version = root.get("version", "")
        if version and version not in _KNOWN_VERSIONS:
            warnings.append(LoadIssue(f"Unknown format version {version!r}"))

        identity: dict[str, str] = {}
        entries: dict[str, str] = {}
        declarations = _children(root, "declaration")
        for declaration in declarations:
            for meta in _children(declaration, "meta"):
                key = meta.get("name", "")
                if not key:
                    warnings.append(LoadIssue("Ignoring <meta> without a name"))
                    continue
                if key.lower() in _IDENTITY_KEYS:
                    identity[key.lower()] = _meta_value(meta)
                else:
                    entries[key] = _meta_value(meta)

        component_name = identity.get("name", "").strip()
        if not declarations:
            errors.append(LoadIssue("Missing <declaration> section"))
        elif not component_name:
            errors.append(LoadIssue("Component name is missing or empty"))

        guid = self._read_guid(identity.get("guid", ""), component_name, errors, warnings)

        configurations: list[ComponentConfiguration] = []
        containers = _children(root, "configurations")
        for declaration in declarations:
            containers.extend(_children(declaration, "configurations"))
        for container in containers:
            for element in _children(container, "configuration"):
                configuration = self._read_configuration(element, errors)
                if configuration is not None:
                    configurations.append(configuration)

        for issue in warnings:
            logger.warning("%s", issue)
        if errors:
            for issue in errors:
                logger.error("%s", issue)
            return LoadResult(errors=tuple(errors), warnings=tuple(warnings))

        description = Description(
            component_name=component_name,
            guid=guid,
            author=identity.get("author", ""),
            additional_information=identity.get("additionalinformation", ""),
            metadata=tuple(entries.items()),
            configurations=tuple(configurations),
            version=version,
        )
        logger.debug(
            "Loaded %s: %d metadata entries, %d configurations",
            description.component_name,
            len(description.metadata),
            len(description.configurations),
        )
        return LoadResult(description=description, warnings=tuple(warnings))

    @staticmethod
    def _read_guid(
        raw: str,
        component_name: str,
        errors: list[LoadIssue],
        warnings: list[LoadIssue],
    ) -> uuid.UUID:
        raw = raw.strip()
        if not raw:
            warnings.append(LoadIssue("Component has no GUID, deriving one from its name"))
            return uuid.uuid5(uuid.NAMESPACE_URL, f"circuit-diagram:{component_name}")
        try:
            return uuid.UUID(raw)
        except ValueError:
            errors.append(LoadIssue(f"Invalid GUID {raw!r}"))
            return uuid.UUID(int=0)

    @staticmethod
    def _read_configuration(
        element: ET.Element,
        errors: list[LoadIssue],
    ) -> ComponentConfiguration | None:
        name = element.get("name", "").strip()
        if not name:
            errors.append(LoadIssue("Configuration is missing a name"))
            return None
        settings = tuple(
            (key, value)
            for key, value in element.attrib.items()
            if key not in ("name", "implements")
        )
        return ComponentConfiguration(
            name=name,
            implements=element.get("implements", ""),
            settings=settings,
        )

    @staticmethod
    def _fail(issue: LoadIssue) -> LoadResult:
        logger.error("%s", issue)
        return LoadResult(errors=(issue,))
