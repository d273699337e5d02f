"""
Mapping Store Tests

Focus:
- reconcile() steal-on-conflict semantics
- replace_at keeps the edited mapping's identity and position
- prune / unmapped / retarget helpers
"""

import random

import pytest

from core.mapping.mapping_store import MappingStore, prune_invalid, reconcile, replace_at
from core.model.enum.connector_enum import MappingSide
from core.schema.preset_schema import PinMapping


def pairs(mappings: list[PinMapping]) -> list[tuple[int, int]]:
    return [m.as_pair() for m in mappings]


class TestReconcile:

    def test_when_pins_free_then_appends(self):
        result = reconcile([PinMapping(esc_pin=1, fc_pin=1)], 2, 2)

        assert pairs(result) == [(1, 1), (2, 2)]

    def test_when_esc_pin_taken_then_previous_mapping_is_replaced(self):
        result = reconcile([PinMapping(esc_pin=1, fc_pin=1)], 1, 2)

        assert pairs(result) == [(1, 2)]

    def test_steal_sequence(self):
        """
        GIVEN store [(1,1)]
        WHEN addOrReplace(1,2) then addOrReplace(2,2)
        THEN store is [(1,2)] then [(2,2)]
        """
        store = MappingStore([PinMapping(esc_pin=1, fc_pin=1)])

        assert pairs(store.add_or_replace(1, 2)) == [(1, 2)]
        assert pairs(store.add_or_replace(2, 2)) == [(2, 2)]

    def test_when_pair_already_present_then_no_op(self):
        original = [PinMapping(esc_pin=1, fc_pin=5), PinMapping(esc_pin=2, fc_pin=6)]

        result = reconcile(original, 1, 5)

        assert pairs(result) == [(1, 5), (2, 6)]

    def test_when_both_pins_used_by_different_mappings_then_both_evicted(self):
        original = [PinMapping(esc_pin=1, fc_pin=5), PinMapping(esc_pin=2, fc_pin=6)]

        result = reconcile(original, 1, 6)

        assert pairs(result) == [(1, 6)]

    def test_input_list_is_not_mutated(self):
        original = [PinMapping(esc_pin=1, fc_pin=1)]

        reconcile(original, 1, 2)

        assert pairs(original) == [(1, 1)]

    def test_random_sequences_keep_matching_invariant(self):
        rng = random.Random(1234)
        store = MappingStore()

        for _ in range(500):
            store.add_or_replace(rng.randint(1, 8), rng.randint(1, 8))

            esc_ids = [m.esc_pin for m in store]
            fc_ids = [m.fc_pin for m in store]
            assert len(esc_ids) == len(set(esc_ids))
            assert len(fc_ids) == len(set(fc_ids))


class TestRemove:

    def test_removes_exact_pair_only(self):
        store = MappingStore([PinMapping(esc_pin=1, fc_pin=1), PinMapping(esc_pin=2, fc_pin=2)])

        store.remove(1, 1)

        assert pairs(store.mappings) == [(2, 2)]

    def test_when_pair_absent_then_silent_no_op(self):
        store = MappingStore([PinMapping(esc_pin=1, fc_pin=1)])

        store.remove(1, 2)
        store.remove(9, 9)

        assert pairs(store.mappings) == [(1, 1)]


class TestReplaceAt:

    def test_replaces_endpoints_in_place(self):
        original = [PinMapping(esc_pin=1, fc_pin=1), PinMapping(esc_pin=2, fc_pin=2), PinMapping(esc_pin=3, fc_pin=3)]

        result = replace_at(original, 1, 2, 7)

        assert pairs(result) == [(1, 1), (2, 7), (3, 3)]

    def test_evicts_other_mapping_using_new_endpoint(self):
        """
        GIVEN [(1,1), (2,2), (3,3)]
        WHEN mapping at index 2 is re-pointed to ESC pin 1
        THEN (1,1) is evicted and the edited mapping is still the last one
        """
        original = [PinMapping(esc_pin=1, fc_pin=1), PinMapping(esc_pin=2, fc_pin=2), PinMapping(esc_pin=3, fc_pin=3)]

        result = replace_at(original, 2, 1, 3)

        assert pairs(result) == [(2, 2), (1, 3)]

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_when_index_out_of_range_then_no_op(self, index):
        original = [PinMapping(esc_pin=1, fc_pin=1), PinMapping(esc_pin=2, fc_pin=2), PinMapping(esc_pin=3, fc_pin=3)]

        result = replace_at(original, index, 5, 5)

        assert pairs(result) == [(1, 1), (2, 2), (3, 3)]


class TestPruneAndQueries:

    def test_prune_invalid_drops_mappings_with_unknown_pins(self):
        original = [PinMapping(esc_pin=1, fc_pin=10), PinMapping(esc_pin=2, fc_pin=11), PinMapping(esc_pin=3, fc_pin=12)]

        result = prune_invalid(original, valid_esc_ids={1, 2}, valid_fc_ids={10, 12})

        assert pairs(result) == [(1, 10)]

    def test_unmapped_returns_pins_in_display_order(self, esc_connector, fc_connector):
        store = MappingStore([PinMapping(esc_pin=2, fc_pin=10)])

        assert [p.id for p in store.unmapped(esc_connector, MappingSide.ESC)] == [1, 3, 4]
        assert [p.id for p in store.unmapped(fc_connector, MappingSide.FC)] == [11, 12, 13]

    def test_partner_of(self):
        store = MappingStore([PinMapping(esc_pin=2, fc_pin=10)])

        assert store.partner_of(MappingSide.ESC, 2) == 10
        assert store.partner_of(MappingSide.FC, 10) == 2
        assert store.partner_of(MappingSide.ESC, 1) is None

    def test_constructor_resolves_conflicting_input_last_wins(self):
        store = MappingStore([PinMapping(esc_pin=1, fc_pin=1), PinMapping(esc_pin=1, fc_pin=2)])

        assert pairs(store.mappings) == [(1, 2)]


class TestRetarget:

    def test_fc_side_retarget_keeps_esc_partner(self):
        store = MappingStore([PinMapping(esc_pin=1, fc_pin=10), PinMapping(esc_pin=2, fc_pin=11)])

        store.retarget(MappingSide.FC, from_pin=10, to_pin=11)

        assert pairs(store.mappings) == [(1, 11)]

    def test_esc_side_retarget_keeps_fc_partner(self):
        store = MappingStore([PinMapping(esc_pin=1, fc_pin=10)])

        store.retarget(MappingSide.ESC, from_pin=1, to_pin=3)

        assert pairs(store.mappings) == [(3, 10)]

    def test_when_pin_unmapped_then_no_op(self):
        store = MappingStore([PinMapping(esc_pin=1, fc_pin=10)])

        store.retarget(MappingSide.ESC, from_pin=2, to_pin=3)

        assert pairs(store.mappings) == [(1, 10)]
