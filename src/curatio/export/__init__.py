"""DataCite JSON and XML serialization."""

from .json_exporter import DataCiteJsonExporter
from .mapping import DataCiteMapping
from .xml_exporter import DataCiteXmlExporter

__all__ = [
    "DataCiteJsonExporter",
    "DataCiteMapping",
    "DataCiteXmlExporter",
]
