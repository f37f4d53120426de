"""Description loaders — turn component documents into ``Description`` values."""

from cdcc.ingest.base import BaseDescriptionLoader
from cdcc.ingest.component_xml import XmlDescriptionLoader

__all__ = [
    "BaseDescriptionLoader",
    "XmlDescriptionLoader",
]
