"""Menu catalog: listing, CRUD, availability and search."""

from decimal import Decimal

import pytest

from canteen.core.errors import NotFound, ValidationError
from canteen.crud import menu_item as catalog
from canteen.crud import order as ledger
from canteen.models.menu.menu_item import MenuCategory


class TestListing:
    async def test_list_is_ordered_by_category_then_name(self, db, menu):
        items = await catalog.list_menu_items(db)
        assert [i.name for i in items] == [
            "Chicken Teriyaki Bowl",
            "Veggie Wrap",
            "Fresh Lemonade",
            "Iced Milk Tea",
        ]

    async def test_unavailable_items_are_hidden_by_default(self, db, menu):
        await catalog.toggle_availability(db, menu["Veggie Wrap"])

        visible = await catalog.list_menu_items(db)
        everything = await catalog.list_menu_items(db, include_unavailable=True)

        assert "Veggie Wrap" not in [i.name for i in visible]
        assert "Veggie Wrap" in [i.name for i in everything]

    async def test_list_by_category(self, db, menu):
        drinks = await catalog.list_by_category(db, "Drink")
        assert [i.name for i in drinks] == ["Fresh Lemonade", "Iced Milk Tea"]

    async def test_list_by_category_respects_availability(self, db, menu):
        await catalog.toggle_availability(db, menu["Fresh Lemonade"])

        assert [i.name for i in await catalog.list_by_category(db, MenuCategory.Drink)] == ["Iced Milk Tea"]
        assert len(await catalog.list_by_category(db, MenuCategory.Drink, include_unavailable=True)) == 2

    async def test_list_by_unknown_category_is_rejected(self, db, menu):
        with pytest.raises(ValidationError):
            await catalog.list_by_category(db, "Snacks")

    async def test_get_menu_item(self, db, menu):
        item = await catalog.get_menu_item(db, menu["Iced Milk Tea"])
        assert item.price == Decimal("2.50")
        assert item.category == MenuCategory.Drink

    async def test_get_missing_menu_item(self, db):
        with pytest.raises(NotFound):
            await catalog.get_menu_item(db, 999)


class TestAddMenuItem:
    async def test_add_returns_new_id(self, db):
        new_id = await catalog.add_menu_item(db, "Leche Flan", "Caramel custard.", "3.00", "Dessert")

        item = await catalog.get_menu_item(db, new_id)
        assert item.name == "Leche Flan"
        assert item.price == Decimal("3.00")
        assert item.is_available is True
        assert item.image_url is None

    async def test_negative_price_is_rejected(self, db):
        with pytest.raises(ValidationError):
            await catalog.add_menu_item(db, "Free Money", "", "-0.01", "Food")
        assert await catalog.list_menu_items(db, include_unavailable=True) == []

    async def test_unknown_category_is_rejected(self, db):
        with pytest.raises(ValidationError):
            await catalog.add_menu_item(db, "Mystery", "", "1.00", "Snacks")

    async def test_non_numeric_price_is_rejected(self, db):
        with pytest.raises(ValidationError):
            await catalog.add_menu_item(db, "Mystery", "", "abc", "Food")

    async def test_blank_name_is_rejected(self, db):
        with pytest.raises(ValidationError):
            await catalog.add_menu_item(db, "   ", "", "1.00", "Food")


class TestUpdateMenuItem:
    async def test_update_without_image_keeps_existing_image(self, db, menu):
        item_id = menu["Iced Milk Tea"]
        affected = await catalog.update_menu_item(
            db, item_id, "Iced Milk Tea", "Now with less sugar.", "2.75", "Drink", is_available=True
        )

        item = await catalog.get_menu_item(db, item_id)
        assert affected == 1
        assert item.price == Decimal("2.75")
        assert item.description == "Now with less sugar."
        assert item.image_url == "assets/img/iced-milk-tea.jpg"

    async def test_update_with_new_image_replaces_it(self, db, menu):
        item_id = menu["Iced Milk Tea"]
        await catalog.update_menu_item(
            db, item_id, "Iced Milk Tea", "", "2.50", "Drink", image_url="/static/uploads/menu_items/new.jpg"
        )
        assert (await catalog.get_menu_item(db, item_id)).image_url == "/static/uploads/menu_items/new.jpg"

    async def test_update_with_explicit_none_clears_image(self, db, menu):
        item_id = menu["Iced Milk Tea"]
        await catalog.update_menu_item(db, item_id, "Iced Milk Tea", "", "2.50", "Drink", image_url=None)
        assert (await catalog.get_menu_item(db, item_id)).image_url is None

    async def test_update_missing_item_affects_nothing(self, db, menu):
        affected = await catalog.update_menu_item(db, 999, "Ghost", "", "1.00", "Food")
        assert affected == 0

    async def test_update_validates_before_writing(self, db, menu):
        item_id = menu["Veggie Wrap"]
        with pytest.raises(ValidationError):
            await catalog.update_menu_item(db, item_id, "Veggie Wrap", "", "-1", "Food")
        assert (await catalog.get_menu_item(db, item_id)).price == Decimal("4.25")


class TestToggleAvailability:
    async def test_toggle_flips_flag_and_reports_it(self, db, menu):
        item_id = menu["Veggie Wrap"]

        row = await catalog.toggle_availability(db, item_id)
        assert (row.id, row.name, row.is_available) == (item_id, "Veggie Wrap", False)

        row = await catalog.toggle_availability(db, item_id)
        assert row.is_available is True

    async def test_toggle_missing_item_returns_none(self, db):
        assert await catalog.toggle_availability(db, 999) is None


class TestDeleteMenuItem:
    async def test_delete_returns_orphaned_image(self, db, menu):
        image_url, affected = await catalog.delete_menu_item(db, menu["Veggie Wrap"])

        assert image_url == "assets/img/veggie-wrap.jpg"
        assert affected == 1
        with pytest.raises(NotFound):
            await catalog.get_menu_item(db, menu["Veggie Wrap"])

    async def test_delete_missing_item(self, db):
        assert await catalog.delete_menu_item(db, 999) == (None, 0)

    async def test_order_lines_keep_their_snapshot(self, db, menu, customer):
        tea = menu["Iced Milk Tea"]
        order = await ledger.create_order(db, customer.id, "immediate", [(tea, 3)])

        await catalog.delete_menu_item(db, tea)

        lines = await ledger.get_order_items(db, order.id)
        assert len(lines) == 1
        assert lines[0].menu_item_id is None
        assert lines[0].item_name == "Iced Milk Tea"
        assert lines[0].quantity == 3
        assert lines[0].price_each == Decimal("2.50")
        assert (await ledger.read_order(db, order.id)).total_amount == Decimal("7.50")


class TestSearch:
    async def test_name_match_ranks_first(self, db, menu):
        results = await catalog.search_menu_items(db, "tea")
        assert results[0].name == "Iced Milk Tea"

    async def test_name_match_beats_description_only_match(self, db, menu):
        await catalog.add_menu_item(db, "Halo-Halo", "Shaved ice dessert, great with tea.", "3.25", "Dessert")

        results = await catalog.search_menu_items(db, "tea")
        assert [i.name for i in results] == ["Iced Milk Tea", "Halo-Halo"]

    async def test_description_match_is_found(self, db, menu):
        results = await catalog.search_menu_items(db, "hummus")
        assert [i.name for i in results] == ["Veggie Wrap"]

    async def test_search_is_case_insensitive_and_matches_word_prefixes(self, db, menu):
        results = await catalog.search_menu_items(db, "LEMON")
        assert [i.name for i in results] == ["Fresh Lemonade"]

    async def test_more_matching_words_rank_higher(self, db, menu):
        results = await catalog.search_menu_items(db, "chicken rice")
        assert results[0].name == "Chicken Teriyaki Bowl"

    async def test_ties_break_alphabetically(self, db, menu):
        await catalog.add_menu_item(db, "Apple Tea", "Chilled apple tea.", "2.00", "Drink")

        results = await catalog.search_menu_items(db, "tea")
        assert [i.name for i in results][:2] == ["Apple Tea", "Iced Milk Tea"]

    @pytest.mark.parametrize("term", ["", "   ", "te", "a b"])
    async def test_short_or_empty_terms_return_nothing(self, db, menu, term):
        assert await catalog.search_menu_items(db, term) == []

    async def test_like_wildcards_are_literal(self, db, menu):
        assert await catalog.search_menu_items(db, "%%%") == []

    async def test_search_tokens(self):
        assert catalog.search_tokens("*tea* +milk ab") == ["tea", "milk"]
