"""Tests for InventoryState."""

from src.core.entities.inventory import MovementType
from src.core.services import InventoryState


class TestLoad:
    async def test_load_fetches_both_collections(self, mock_store, make_item, make_movement):
        item = make_item()
        movement = make_movement(item)
        mock_store.fetch_items.return_value = [item]
        mock_store.fetch_movements.return_value = [movement]

        state = await InventoryState.load(mock_store)

        assert state.items == [item]
        assert state.movements == [movement]
        mock_store.fetch_items.assert_awaited_once()
        mock_store.fetch_movements.assert_awaited_once()


class TestItems:
    def test_add_item_goes_first(self, make_item):
        a, b = make_item(name="A"), make_item(name="B")
        state = InventoryState(items=[a])
        state.add_item(b)
        assert [i.name for i in state.items] == ["B", "A"]

    def test_add_item_at_position(self, make_item):
        a, b, c = make_item(name="A"), make_item(name="B"), make_item(name="C")
        state = InventoryState(items=[a, c])
        state.add_item(b, position=1)
        assert [i.name for i in state.items] == ["A", "B", "C"]
        assert state.position_of(c.id) == 2
        assert state.position_of("missing") is None

    def test_replace_returns_previous(self, make_item):
        item = make_item(quantity=1)
        state = InventoryState(items=[item])
        previous = state.replace_item(item.model_copy(update={"quantity": 9}))
        assert previous is item
        assert state.get_item(item.id).quantity == 9

    def test_replace_unknown_returns_none(self, make_item):
        state = InventoryState()
        assert state.replace_item(make_item()) is None
        assert state.items == []

    def test_remove_item(self, make_item):
        item = make_item()
        state = InventoryState(items=[item])
        assert state.remove_item(item.id) is item
        assert state.remove_item(item.id) is None
        assert state.get_item(item.id) is None

    def test_find_batch(self, make_item):
        x = make_item(name="Chicle", batch_number="X")
        y = make_item(name="Chicle", batch_number="Y")
        other = make_item(name="Paleta", batch_number="Y")
        state = InventoryState(items=[x, y, other])
        assert state.find_batch("Chicle", "Y") is y
        assert state.find_batch("Chicle", "Z") is None

    def test_items_is_a_copy(self, make_item):
        state = InventoryState(items=[make_item()])
        state.items.clear()
        assert len(state.items) == 1


class TestMovements:
    def test_unsynced_oldest_first(self, make_item, make_movement):
        item = make_item()
        state = InventoryState()
        first = make_movement(item)
        second = make_movement(item, MovementType.ENTRY)
        state.append_movement(first)
        state.append_movement(second)
        state.mark_unsynced(first.id)
        state.mark_unsynced(second.id)

        assert state.movements == [second, first]
        assert state.unsynced_movements == [first, second]

        state.mark_synced(first.id)
        assert state.unsynced_movements == [second]
        assert not state.is_unsynced(first.id)
