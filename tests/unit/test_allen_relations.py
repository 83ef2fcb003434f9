"""Тесты для алгебры интервалов Аллена.

Coverage:
- 13 предикатов на конкретных сценариях (ровно одно отношение + converse)
- Исчерпываемость и взаимоисключаемость на сетке периодов
- relate() и converse()
- Чувствительность к грануле (hour vs microsecond)
- Нулевые периоды
"""

from datetime import datetime, timedelta, timezone
from itertools import combinations
from zoneinfo import ZoneInfo

import pytest

from datetime_period.core.domain import Granule, Period, truncate
from datetime_period.relations import (
    CONVERSE,
    RELATION_PREDICATES,
    AllenRelation,
    holding_relations,
    holds,
    relate,
)


def period(start: str, end: str) -> Period:
    """Период 2017-01-01 [start, end) в UTC."""
    return Period(
        start=datetime.fromisoformat(f"2017-01-01T{start}:00+00:00"),
        end=datetime.fromisoformat(f"2017-01-01T{end}:00+00:00"),
    )


# =============================================================================
# SCENARIOS
# =============================================================================


SCENARIOS = [
    (AllenRelation.PRECEDES, ("10:00", "12:00"), ("14:00", "16:00")),
    (AllenRelation.MEETS, ("10:00", "12:00"), ("12:00", "14:00")),
    (AllenRelation.OVERLAPS, ("11:00", "13:00"), ("12:00", "14:00")),
    (AllenRelation.FINISHED_BY, ("10:00", "14:00"), ("12:00", "14:00")),
    (AllenRelation.CONTAINS, ("10:00", "14:00"), ("11:00", "13:00")),
    (AllenRelation.STARTS, ("10:00", "12:00"), ("10:00", "14:00")),
    (AllenRelation.EQUALS, ("10:00", "12:00"), ("10:00", "12:00")),
    (AllenRelation.STARTED_BY, ("10:00", "14:00"), ("10:00", "12:00")),
    (AllenRelation.DURING, ("11:00", "13:00"), ("10:00", "14:00")),
    (AllenRelation.FINISHES, ("12:00", "14:00"), ("10:00", "14:00")),
    (AllenRelation.OVERLAPPED_BY, ("12:00", "14:00"), ("11:00", "13:00")),
    (AllenRelation.MET_BY, ("12:00", "14:00"), ("10:00", "12:00")),
    (AllenRelation.PRECEDED_BY, ("14:00", "16:00"), ("10:00", "12:00")),
]


class TestRelationScenarios:
    """Каждый сценарий даёт ровно одно отношение и его converse."""

    @pytest.mark.parametrize("relation, a_bounds, b_bounds", SCENARIOS, ids=[s[0].value for s in SCENARIOS])
    def test_exactly_one_relation(self, relation, a_bounds, b_bounds):
        a = period(*a_bounds)
        b = period(*b_bounds)

        assert holds(relation, a, b)
        others = [r for r in AllenRelation if r != relation]
        assert not any(holds(r, a, b) for r in others)

    @pytest.mark.parametrize("relation, a_bounds, b_bounds", SCENARIOS, ids=[s[0].value for s in SCENARIOS])
    def test_converse_holds(self, relation, a_bounds, b_bounds):
        a = period(*a_bounds)
        b = period(*b_bounds)

        assert holds(relation.converse(), b, a)
        assert relate(b, a) == relation.converse()

    def test_method_names(self):
        """Предикаты доступны как методы Period."""
        a = period("10:00", "12:00")
        b = period("12:00", "14:00")

        assert a.meets(b)
        assert b.met_by(a)
        assert not a.precedes(b)
        assert not a.overlaps(b)


# =============================================================================
# ALGEBRA PROPERTIES
# =============================================================================


def grid_periods():
    """Все невырожденные периоды на сетке из 5 часов."""
    base = datetime(2017, 1, 1, 10, tzinfo=timezone.utc)
    points = [base + timedelta(hours=i) for i in range(5)]
    return [Period(start=s, end=e) for s, e in combinations(points, 2)]


class TestAlgebraProperties:
    """Исчерпываемость, взаимоисключаемость, converse."""

    def test_exactly_one_relation_for_every_pair(self):
        periods = grid_periods()
        seen = set()

        for a in periods:
            for b in periods:
                holding = holding_relations(a, b)
                assert len(holding) == 1, (a, b, holding)
                seen.add(holding[0])

        # Сетка из 5 точек порождает все 13 отношений
        assert seen == set(AllenRelation)

    def test_converse_consistency(self):
        periods = grid_periods()

        for a in periods:
            for b in periods:
                assert relate(b, a) == relate(a, b).converse()

    def test_reflexive_equals(self):
        for a in grid_periods():
            assert a.equals(a)
            assert relate(a, a) == AllenRelation.EQUALS

    def test_equals_symmetric(self):
        periods = grid_periods()
        for a in periods:
            for b in periods:
                assert a.equals(b) == b.equals(a)

    def test_converse_is_involution(self):
        for relation in AllenRelation:
            assert relation.converse().converse() == relation
        assert AllenRelation.EQUALS.converse() == AllenRelation.EQUALS

    def test_tables_cover_all_relations(self):
        assert set(CONVERSE) == set(AllenRelation)
        assert set(RELATION_PREDICATES) == set(AllenRelation)


# =============================================================================
# VALUE SEMANTICS
# =============================================================================


class TestValueSemantics:
    """Сравнение по абсолютному времени, не по идентичности и не по зоне."""

    def test_equals_across_zone_representations(self):
        """Europe/London летом и фиксированный +01:00 — одни и те же instant."""
        london = ZoneInfo("Europe/London")
        plus_one = timezone(timedelta(hours=1))

        a = Period(start=datetime(2018, 6, 1, 10, tzinfo=london), end=datetime(2018, 6, 1, 12, tzinfo=london))
        b = Period(start=datetime(2018, 6, 1, 10, tzinfo=plus_one), end=datetime(2018, 6, 1, 12, tzinfo=plus_one))

        assert a is not b
        assert a.equals(b)
        assert b.equals(a)

    def test_compares_absolute_time_within_one_zone(self):
        """Один ZoneInfo в повторяющемся часе (конец BST): сравнение по UTC."""
        london = ZoneInfo("Europe/London")
        # 2018-10-28 01:00-02:00 наступает дважды: fold=0 — BST, fold=1 — GMT
        bst = Period(
            start=datetime(2018, 10, 28, 1, 10, tzinfo=london),
            end=datetime(2018, 10, 28, 1, 30, tzinfo=london),
        )
        gmt = Period(
            start=datetime(2018, 10, 28, 1, 5, fold=1, tzinfo=london),
            end=datetime(2018, 10, 28, 1, 20, fold=1, tzinfo=london),
        )

        assert bst.utc_offset() == "+01:00"
        assert gmt.utc_offset() == "+00:00"
        # bst = [00:10, 00:30) UTC, gmt = [01:05, 01:20) UTC
        assert bst.precedes(gmt)
        assert relate(gmt, bst) == AllenRelation.PRECEDED_BY


# =============================================================================
# GRANULARITY
# =============================================================================


class TestGranularity:
    """Отношения зависят от гранулы шкалы."""

    A_START = "2017-01-01T12:12:09.829462+00:00"
    A_END = "2017-01-01T14:23:34.534678+00:00"
    B_START = "2017-01-01T14:41:57.657388+00:00"
    B_END = "2017-01-01T16:19:03.412832+00:00"

    def build(self, granule: Granule):
        a = Period(
            start=truncate(datetime.fromisoformat(self.A_START), granule),
            end=truncate(datetime.fromisoformat(self.A_END), granule),
        )
        b = Period(
            start=truncate(datetime.fromisoformat(self.B_START), granule),
            end=truncate(datetime.fromisoformat(self.B_END), granule),
        )
        return a, b

    def test_meets_at_hour_granule(self):
        a, b = self.build(Granule.HOUR)

        assert a.meets(b)
        assert relate(a, b) == AllenRelation.MEETS

    def test_no_adjacency_at_minute_granule(self):
        a, b = self.build(Granule.MINUTE)

        assert not a.meets(b)

    def test_disjoint_at_microsecond_granule(self):
        a, b = self.build(Granule.MICROSECOND)

        assert not a.meets(b)
        assert not a.met_by(b)
        assert a.precedes(b)
        assert relate(a, b) == AllenRelation.PRECEDES

    def test_no_implicit_rounding(self):
        """Без truncate границы сохраняются до микросекунд."""
        a = Period(start=datetime.fromisoformat(self.A_START), end=datetime.fromisoformat(self.A_END))
        assert a.end.microsecond == 534678


# =============================================================================
# DEGENERATE PERIODS
# =============================================================================


class TestZeroLengthPeriods:
    """Нулевые периоды проверяются теми же формулами."""

    def test_zero_length_with_itself(self):
        ts = datetime(2017, 1, 1, 12, tzinfo=timezone.utc)
        a = Period(start=ts, end=ts)

        assert a.equals(a)
        assert holding_relations(a, a) == (
            AllenRelation.MEETS,
            AllenRelation.EQUALS,
            AllenRelation.MET_BY,
        )
        assert relate(a, a) == AllenRelation.EQUALS

    def test_zero_length_inside_period(self):
        ts = datetime(2017, 1, 1, 12, tzinfo=timezone.utc)
        point = Period(start=ts, end=ts)
        span = period("10:00", "14:00")

        assert point.during(span)
        assert relate(span, point) == AllenRelation.CONTAINS

    def test_point_at_start_of_period(self):
        """[10, 10) и [10, 14): starts / started_by, а не meets / met_by."""
        point = period("10:00", "10:00")
        span = period("10:00", "14:00")

        assert holding_relations(point, span) == (AllenRelation.MEETS, AllenRelation.STARTS)
        assert relate(point, span) == AllenRelation.STARTS
        assert relate(span, point) == AllenRelation.STARTED_BY

    def test_point_at_end_of_period(self):
        """[14, 14) и [10, 14): finishes / finished_by."""
        point = period("14:00", "14:00")
        span = period("10:00", "14:00")

        assert relate(point, span) == AllenRelation.FINISHES
        assert relate(span, point) == AllenRelation.FINISHED_BY

    def test_converse_and_reflexivity_with_points(self):
        """Сетка из 4 часов, включая все нулевые периоды."""
        base = datetime(2017, 1, 1, 10, tzinfo=timezone.utc)
        points = [base + timedelta(hours=i) for i in range(4)]
        periods = [Period(start=s, end=e) for s in points for e in points if s <= e]

        for a in periods:
            assert relate(a, a) == AllenRelation.EQUALS
            for b in periods:
                relation = relate(a, b)
                assert holds(relation, a, b)
                assert relate(b, a) == relation.converse(), (a, b)
