"""
Dependency Graph Models

Pydantic models for a materialized dependency graph: every node (file,
symbol, library, artifact) with its denormalized relationship lists, plus
the normalized, grouped edge list.

Field names are Pythonic; the wire keys of the JSON document are aliases.
Constructors take field names, documents are decoded by wire key only,
and output always uses the wire keys.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

# Category of a node or an edge group. The producer owns the vocabulary;
# values are carried through as plain strings.
NodeType = StrictStr
EdgeType = StrictStr

SYMBOL = "symbol"
FILE = "file"
LIBRARY = "library"
ARTIFACT = "artifact"


def _nulls_replaced(value, zero):
    """Replace ``null`` items of a JSON array with the item type's zero value."""
    if isinstance(value, list):
        return [zero() if item is None else item for item in value]
    return value


class _GraphModel(BaseModel):
    """Immutable wire model; JSON ``null`` means "use the zero value"."""

    model_config = ConfigDict(
        frozen=True,
        validate_by_name=True,
        validate_by_alias=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _nulls_as_defaults(cls, data):
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class NodeRelationship(_GraphModel):
    """Reference to a node by graph index and name. Carries no ownership."""

    graph_id: StrictInt = Field(default=0, alias="index")
    name: StrictStr = Field(default="", alias="id")


class NodeRelationships(_GraphModel):
    """Denormalized snapshot of a node's neighbours, by relationship kind."""

    dependent_libraries: tuple[StrictStr, ...] = Field(default=(), alias="_dependent_libs")
    libraries: tuple[StrictStr, ...] = Field(default=(), alias="_libs")
    files: tuple[StrictStr, ...] = Field(default=(), alias="_files")
    dependent_files: tuple[StrictStr, ...] = Field(default=(), alias="_dependent_files")
    type: NodeType = ""

    @field_validator(
        "dependent_libraries", "libraries", "files", "dependent_files", mode="before"
    )
    @classmethod
    def _null_names_as_empty(cls, value):
        return _nulls_replaced(value, str)


class Node(_GraphModel):
    """A single item in the graph: a symbol, file, library or artifact."""

    name: StrictStr = Field(default="", alias="id")
    graph_id: StrictInt = Field(default=0, alias="index")
    relationships: NodeRelationships = Field(default_factory=NodeRelationships, alias="node")


class Edge(_GraphModel):
    """
    One group of directed edges of the same kind.

    All targets in ``to_nodes`` share the originating ``from_node``.
    """

    type: EdgeType = ""
    from_node: NodeRelationship = Field(default_factory=NodeRelationship)
    to_nodes: tuple[NodeRelationship, ...] = Field(default=(), alias="to_node")

    @field_validator("to_nodes", mode="before")
    @classmethod
    def _null_targets_as_empty(cls, value):
        return _nulls_replaced(value, dict)


class Graph(_GraphModel):
    """
    A fully materialized dependency graph.

    ``edges`` and ``nodes`` keep the order of the source document.
    ``build_id`` identifies the build the graph describes; it is assigned
    by the loader and never read from a document, only written to one.
    """

    edges: tuple[Edge, ...] = ()
    nodes: tuple[Node, ...] = ()
    build_id: StrictStr = Field(default="", alias="id")

    @model_validator(mode="before")
    @classmethod
    def _ignore_document_id(cls, data):
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if key != "id"}
        return data

    @field_validator("edges", "nodes", mode="before")
    @classmethod
    def _null_items_as_empty(cls, value):
        return _nulls_replaced(value, dict)

    @classmethod
    def from_json(cls, data: bytes | str) -> "Graph":
        """Decode a graph document by wire key. Raises ``pydantic.ValidationError``."""
        return cls.model_validate_json(data, by_alias=True, by_name=False)

    def to_json(self, indent: int | None = None) -> str:
        """Serialize using the document schema; ``id`` is omitted when empty."""
        exclude = None if self.build_id else {"build_id"}
        return self.model_dump_json(by_alias=True, exclude=exclude, indent=indent)

    def node_types(self) -> dict[str, int]:
        """Number of nodes per node type, in first-seen order."""
        counts: dict[str, int] = {}
        for node in self.nodes:
            kind = node.relationships.type
            counts[kind] = counts.get(kind, 0) + 1
        return counts

    def edge_types(self) -> dict[str, int]:
        """Number of edge targets per edge type, in first-seen order."""
        counts: dict[str, int] = {}
        for edge in self.edges:
            counts[edge.type] = counts.get(edge.type, 0) + len(edge.to_nodes)
        return counts
