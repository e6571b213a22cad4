"""
Verse Graph API — Resource Definitions
========================================

What:  Declares the three REST resources as data.
How:   Each ResourceDefinition names its collection, URL prefix, wording for
       the OpenAPI docs, and the request/response schemas. The generic router
       in verse_graph.routes.resource turns one definition into six routes.
"""

from dataclasses import dataclass
from typing import Tuple, Type

from verse_graph.schemas.record import EdgeRecordIn, EdgeRecordOut, RecordIn, RecordOut


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Attributes:
        collection:     ArangoDB collection name (also the URL segment)
        label:          Singular noun used in summaries ("verse")
        plural:         Plural noun used in summaries ("verseItems")
        body_model:     Schema for POST/PUT bodies
        response_model: Schema for returned records
        edge:           True for edge collections
    """

    collection: str
    label: str
    plural: str
    body_model: Type[RecordIn] = RecordIn
    response_model: Type[RecordOut] = RecordOut
    edge: bool = False

    @property
    def prefix(self) -> str:
        return f"/{self.collection}"

    def route_name(self, operation: str) -> str:
        return f"{self.collection}_{operation}"


VERSE = ResourceDefinition(collection="verse", label="verse", plural="verseItems")

SOURCE = ResourceDefinition(collection="source", label="source", plural="sourceItems")

HAS_SOURCE = ResourceDefinition(
    collection="hasSource",
    label="hasSource",
    plural="hasSourceItems",
    body_model=EdgeRecordIn,
    response_model=EdgeRecordOut,
    edge=True,
)

RESOURCES: Tuple[ResourceDefinition, ...] = (VERSE, SOURCE, HAS_SOURCE)
