"""
Integration tests for core/virtual_groups.py
Runs the whole build pipeline and checks the published result: partition
completeness, ordering, reverse lookups, atomic publication and statistics.
"""
from types import SimpleNamespace

import pytest

from virtualgroups.core.columns import Column
from virtualgroups.core.errors import InvalidGroupQueryError
from virtualgroups.core.models import GroupingParams, SortOrder
from virtualgroups.core.sources import CallbackSource, ListSource
from virtualgroups.core.virtual_groups import AbstractVirtualGroups, VirtualGroupsImpl


def names(engine, group):
    source = engine.source
    return [source.item_at(i).name for i in engine.groups[group].members]


# =============================================================================
# 1. THE BASIC SCENARIO
# =============================================================================
class TestBuildGroups:

    def test_group_by_dept_sort_by_year(self, engine, dept_column, year_column):
        """Eng → [Bob, Amy], Sales → [Cara]; Amy lives in group 0."""
        groups = engine.build_groups(GroupingParams(group_by_column=dept_column, primary_sort_column=year_column))

        assert [g.label for g in groups] == ["Eng", "Sales"]
        assert names(engine, 0) == ["Bob", "Amy"]
        assert names(engine, 1) == ["Cara"]
        assert engine.group_of_item(0) == 0
        assert engine.position_within_group(0, 0) == 1
        assert engine.member_of_group(0, 0) == 1

    def test_every_item_is_in_exactly_one_group(self, engine, dept_column):
        groups = engine.build_groups(GroupingParams(group_by_column=dept_column))

        members = [i for g in groups for i in g.members]
        assert sorted(members) == list(range(engine.source_count))
        assert sum(g.count for g in groups) == engine.source_count == 3

    def test_round_trip_for_every_item(self, engine, dept_column, year_column):
        engine.build_groups(GroupingParams(group_by_column=dept_column, primary_sort_column=year_column,
                                           primary_sort_order=SortOrder.DESCENDING))

        for item in range(3):
            group = engine.group_of_item(item)
            assert engine.member_of_group(group, engine.position_within_group(group, item)) == item

    def test_equal_keys_share_a_group(self, dept_column):
        rows = [SimpleNamespace(dept=d) for d in ("Eng", "Sales", "Eng", "Legal", "Sales")]
        engine = VirtualGroupsImpl(ListSource(rows))
        engine.build_groups(GroupingParams(group_by_column=dept_column))

        for i in range(len(rows)):
            for j in range(len(rows)):
                same_key = rows[i].dept == rows[j].dept
                assert (engine.group_of_item(i) == engine.group_of_item(j)) == same_key

    def test_returned_list_is_a_copy(self, engine, dept_column):
        groups = engine.build_groups(GroupingParams(group_by_column=dept_column))
        groups.clear()

        assert len(engine.groups) == 2


# =============================================================================
# 2. ORDERING
# =============================================================================
class TestOrdering:

    def test_secondary_column_breaks_ties(self, dept_column, year_column, name_column):
        rows = [SimpleNamespace(name=n, dept="Eng", year=y) for n, y in (("Amy", 2020), ("Zed", 2020), ("Bob", 2019))]
        engine = VirtualGroupsImpl(ListSource(rows))

        engine.build_groups(GroupingParams(group_by_column=dept_column,
                                           primary_sort_column=year_column,
                                           secondary_sort_column=name_column,
                                           secondary_sort_order=SortOrder.DESCENDING))

        assert names(engine, 0) == ["Bob", "Zed", "Amy"]

    def test_group_order_descending_and_none(self, engine, dept_column):
        descending = engine.build_groups(GroupingParams(group_by_column=dept_column,
                                                        group_by_order=SortOrder.DESCENDING))
        assert [g.label for g in descending] == ["Sales", "Eng"]

        rows = [SimpleNamespace(dept=d) for d in ("Sales", "Eng")]
        unsorted = VirtualGroupsImpl(ListSource(rows)).build_groups(
            GroupingParams(group_by_column=dept_column, group_by_order=SortOrder.NONE))
        assert [g.label for g in unsorted] == ["Sales", "Eng"]

    def test_group_labels_compare_case_insensitively(self, dept_column):
        rows = [SimpleNamespace(dept=d) for d in ("beta", "Alpha", "gamma")]
        groups = VirtualGroupsImpl(ListSource(rows)).build_groups(GroupingParams(group_by_column=dept_column))
        assert [g.label for g in groups] == ["Alpha", "beta", "gamma"]

    def test_numeric_keys_sort_by_value(self, year_column):
        rows = [SimpleNamespace(year=y) for y in (2021, 999, 2019)]
        groups = VirtualGroupsImpl(ListSource(rows)).build_groups(GroupingParams(group_by_column=year_column))
        assert [g.key for g in groups] == [999, 2019, 2021]

    @pytest.mark.parametrize("order", [SortOrder.ASCENDING, SortOrder.DESCENDING])
    def test_missing_values_sort_last(self, dept_column, year_column, order):
        rows = [SimpleNamespace(name=n, dept="Eng", year=y) for n, y in (("NoYear", None), ("Amy", 2020), ("Bob", 2019))]
        engine = VirtualGroupsImpl(ListSource(rows))

        engine.build_groups(GroupingParams(group_by_column=dept_column, primary_sort_column=year_column,
                                           primary_sort_order=order))

        assert names(engine, 0)[-1] == "NoYear"

    def test_rebuilds_are_deterministic(self, dept_column, year_column):
        rows = [SimpleNamespace(name=str(i), dept="Eng" if i % 3 else "Sales", year=i % 2) for i in range(30)]
        engine = VirtualGroupsImpl(ListSource(rows))
        params = GroupingParams(group_by_column=dept_column, primary_sort_column=year_column)

        first = [g.members for g in engine.build_groups(params)]
        second = [g.members for g in engine.build_groups(params)]

        assert first == second


# =============================================================================
# 3. EDGE CASES
# =============================================================================
class TestEdgeCases:

    def test_empty_source(self, dept_column):
        engine = VirtualGroupsImpl(ListSource([]))

        assert engine.build_groups(GroupingParams(group_by_column=dept_column)) == []
        with pytest.raises(InvalidGroupQueryError):
            engine.group_of_item(0)
        with pytest.raises(InvalidGroupQueryError):
            engine.member_of_group(0, 0)

    def test_queries_before_any_build_raise(self, engine):
        with pytest.raises(InvalidGroupQueryError):
            engine.group_of_item(0)
        assert engine.groups == ()
        assert engine.last_stats is None

    def test_null_key_gets_its_own_group(self, dept_column):
        rows = [SimpleNamespace(dept="Eng"), SimpleNamespace(dept=None)]
        groups = VirtualGroupsImpl(ListSource(rows)).build_groups(GroupingParams(group_by_column=dept_column))

        null_group = next(g for g in groups if g.key is None)
        assert null_group.label == dept_column.convert_group_key_to_title(None) == "{null}"
        assert null_group.members == (1,)

    def test_failed_rebuild_keeps_previous_result(self, engine, dept_column, people):
        engine.build_groups(GroupingParams(group_by_column=dept_column))

        def explode(model):
            if model.name == "Cara":
                raise RuntimeError("cannot read Cara")
            return model.dept

        broken = Column("Broken", group_key_getter=explode)
        with pytest.raises(RuntimeError):
            engine.build_groups(GroupingParams(group_by_column=broken))

        assert [g.label for g in engine.groups] == ["Eng", "Sales"]
        assert engine.group_of_item(2) == 1

    def test_callback_source(self, people, dept_column):
        engine = VirtualGroupsImpl(CallbackSource(lambda: len(people), people.__getitem__))
        groups = engine.build_groups(GroupingParams(group_by_column=dept_column))
        assert [g.count for g in groups] == [2, 1]


# =============================================================================
# 4. STATISTICS, PROGRESS AND HINTS
# =============================================================================
class TestStatsAndHints:

    def test_stats_cover_every_stage(self, engine, dept_column, year_column):
        engine.build_groups(GroupingParams(group_by_column=dept_column, primary_sort_column=year_column))

        stats = engine.last_stats
        assert stats.source_count == 3
        assert list(stats.stage_stats) == ["Partition", "Member sort", "Group build", "Group sort", "Reverse index"]
        assert stats.stage_stats["Group build"]["groups"] == 2

    def test_progress_callback_receives_stage_names(self, engine, dept_column):
        stages = []
        engine.build_groups(GroupingParams(group_by_column=dept_column),
                            progress_callback=lambda stage, current, total: stages.append(stage))

        assert stages[0] == "Partition"
        assert stages[-1] == "Reverse index"

    def test_cache_hint_is_a_no_op(self, engine, dept_column):
        engine.build_groups(GroupingParams(group_by_column=dept_column))
        assert engine.cache_hint(0, 0, 1, 0) is None

    def test_abstract_strategy_does_nothing(self, dept_column):
        strategy = AbstractVirtualGroups()

        assert strategy.build_groups(GroupingParams(group_by_column=dept_column)) == []
        assert strategy.group_of_item(0) == -1
        assert strategy.member_of_group(0, 0) == -1
        assert strategy.position_within_group(0, 0) == -1
        assert strategy.last_stats is None
