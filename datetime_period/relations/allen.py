"""Allen — Алгебра интервалов Аллена

13 взаимоисключающих и исчерпывающих отношений между двумя периодами.
Для любой пары невырожденных периодов (a, b) выполняется ровно одно
отношение R, и для (b, a) выполняется ровно R.converse().

Нулевые периоды (start == end) проверяются теми же формулами; для них
может выполняться больше одного предиката (например, [t, t) одновременно
meets, equals и met_by сам себя). relate() проверяет meets и met_by
последними (RELATE_PRIORITY), поэтому [t, t) equals сам себе, точка в
начале периода starts его, точка в конце finishes его, и
relate(b, a) == relate(a, b).converse() для любых периодов.
"""

from enum import Enum
from typing import Callable, Dict, Final, Tuple

from datetime_period.core.domain.period import Period


# =============================================================================
# ENUMS
# =============================================================================


class AllenRelation(str, Enum):
    """Отношение между периодами a и b."""

    PRECEDES = "precedes"
    MEETS = "meets"
    OVERLAPS = "overlaps"
    FINISHED_BY = "finished_by"
    CONTAINS = "contains"
    STARTS = "starts"
    EQUALS = "equals"
    STARTED_BY = "started_by"
    DURING = "during"
    FINISHES = "finishes"
    OVERLAPPED_BY = "overlapped_by"
    MET_BY = "met_by"
    PRECEDED_BY = "preceded_by"

    def converse(self) -> "AllenRelation":
        """Отношение, выполняющееся для (b, a), если для (a, b) выполняется self."""
        return CONVERSE[self]


CONVERSE: Final[Dict[AllenRelation, AllenRelation]] = {
    AllenRelation.PRECEDES: AllenRelation.PRECEDED_BY,
    AllenRelation.MEETS: AllenRelation.MET_BY,
    AllenRelation.OVERLAPS: AllenRelation.OVERLAPPED_BY,
    AllenRelation.FINISHED_BY: AllenRelation.FINISHES,
    AllenRelation.CONTAINS: AllenRelation.DURING,
    AllenRelation.STARTS: AllenRelation.STARTED_BY,
    AllenRelation.EQUALS: AllenRelation.EQUALS,
    AllenRelation.STARTED_BY: AllenRelation.STARTS,
    AllenRelation.DURING: AllenRelation.CONTAINS,
    AllenRelation.FINISHES: AllenRelation.FINISHED_BY,
    AllenRelation.OVERLAPPED_BY: AllenRelation.OVERLAPS,
    AllenRelation.MET_BY: AllenRelation.MEETS,
    AllenRelation.PRECEDED_BY: AllenRelation.PRECEDES,
}

# Порядок проверки (по шкале: от "a целиком раньше b" до "a целиком позже b")
RELATION_ORDER: Final[Tuple[AllenRelation, ...]] = tuple(AllenRelation)

# Порядок для relate(): смежность (meets, met_by) проверяется последней
RELATE_PRIORITY: Final[Tuple[AllenRelation, ...]] = tuple(
    relation
    for relation in RELATION_ORDER
    if relation not in (AllenRelation.MEETS, AllenRelation.MET_BY)
) + (AllenRelation.MEETS, AllenRelation.MET_BY)

RELATION_PREDICATES: Final[Dict[AllenRelation, Callable[[Period, Period], bool]]] = {
    AllenRelation.PRECEDES: Period.precedes,
    AllenRelation.MEETS: Period.meets,
    AllenRelation.OVERLAPS: Period.overlaps,
    AllenRelation.FINISHED_BY: Period.finished_by,
    AllenRelation.CONTAINS: Period.contains,
    AllenRelation.STARTS: Period.starts,
    AllenRelation.EQUALS: Period.equals,
    AllenRelation.STARTED_BY: Period.started_by,
    AllenRelation.DURING: Period.during,
    AllenRelation.FINISHES: Period.finishes,
    AllenRelation.OVERLAPPED_BY: Period.overlapped_by,
    AllenRelation.MET_BY: Period.met_by,
    AllenRelation.PRECEDED_BY: Period.preceded_by,
}


# =============================================================================
# FUNCTIONS
# =============================================================================


def holds(relation: AllenRelation, a: Period, b: Period) -> bool:
    """Выполняется ли relation для пары (a, b)."""
    return RELATION_PREDICATES[AllenRelation(relation)](a, b)


def holding_relations(a: Period, b: Period) -> Tuple[AllenRelation, ...]:
    """Все отношения, выполняющиеся для (a, b), в порядке RELATION_ORDER."""
    return tuple(relation for relation in RELATION_ORDER if holds(relation, a, b))


def relate(a: Period, b: Period) -> AllenRelation:
    """
    Отношение между периодами a и b.

    Args:
        a: Первый период
        b: Второй период

    Returns:
        Отношение R такое, что R(a, b) выполняется

    Examples:
        a=[10:00, 12:00), b=[14:00, 16:00) → PRECEDES
        a=[10:00, 12:00), b=[12:00, 14:00) → MEETS
        a=[11:00, 13:00), b=[12:00, 14:00) → OVERLAPS
    """
    for relation in RELATE_PRIORITY:
        if holds(relation, a, b):
            return relation

    # Недостижимо: для любых периодов выполняется хотя бы одно отношение
    raise RuntimeError(f"no Allen relation holds between {a!r} and {b!r}")
