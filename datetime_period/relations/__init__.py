"""Allen interval algebra over Period."""

from datetime_period.relations.allen import (
    CONVERSE,
    RELATE_PRIORITY,
    RELATION_ORDER,
    RELATION_PREDICATES,
    AllenRelation,
    holding_relations,
    holds,
    relate,
)

__all__ = [
    "AllenRelation",
    "CONVERSE",
    "RELATE_PRIORITY",
    "RELATION_ORDER",
    "RELATION_PREDICATES",
    "holds",
    "holding_relations",
    "relate",
]
