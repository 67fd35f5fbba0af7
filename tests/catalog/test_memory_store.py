"""Tests for in-memory catalog stores."""

from decimal import Decimal

import pytest

from ecomm.catalog.entities import Category, Product
from ecomm.catalog.memory import InMemoryCategoryStore, InMemoryProductStore
from ecomm.domain.exceptions import (
    CategoryIntegrityError,
    CategoryNotFoundError,
    InvalidArgumentError,
    InvalidIdentifierError,
)
from tests.conftest import (
    AUDIO,
    COMPUTERS,
    ELECTRONICS,
    LAPTOPS,
    MISSING,
    TOYS,
    make_categories,
    make_widgets,
    oid,
)


class TestInMemoryCategoryStore:
    """Tests for InMemoryCategoryStore."""

    @pytest.mark.asyncio
    async def test_menu_returns_roots_sorted_by_name(
        self, category_store: InMemoryCategoryStore
    ) -> None:
        """Only categories without ancestors are listed."""
        nodes = await category_store.top_level_categories_with_children()
        assert [n.category.id for n in nodes] == [ELECTRONICS, TOYS]

    @pytest.mark.asyncio
    async def test_menu_children_are_one_level_deep(
        self, category_store: InMemoryCategoryStore
    ) -> None:
        """Grandchildren are not included."""
        nodes = await category_store.top_level_categories_with_children()
        electronics = nodes[0]
        assert [c.id for c in electronics.children] == [COMPUTERS, AUDIO]
        assert LAPTOPS not in [c.id for c in electronics.children]
        assert electronics.ancestors is None

    @pytest.mark.asyncio
    async def test_menu_leaf_root_has_empty_children(
        self, category_store: InMemoryCategoryStore
    ) -> None:
        """A root without children reports an empty list."""
        nodes = await category_store.top_level_categories_with_children()
        assert nodes[1].children == []

    @pytest.mark.asyncio
    async def test_ancestor_chain_of_root_is_empty(
        self, category_store: InMemoryCategoryStore
    ) -> None:
        """Root categories have no ancestors."""
        node = await category_store.ancestor_chain(ELECTRONICS)
        assert node.category.id == ELECTRONICS
        assert node.ancestors == []

    @pytest.mark.asyncio
    async def test_ancestor_chain_keeps_stored_order(
        self, category_store: InMemoryCategoryStore
    ) -> None:
        """Ancestors run from immediate parent to root."""
        node = await category_store.ancestor_chain(LAPTOPS)
        assert [a.id for a in node.ancestors] == [COMPUTERS, ELECTRONICS]
        assert node.ancestors[0].name == "Computers"
        assert node.ancestors[0].slug == "computers"
        assert node.children is None

    @pytest.mark.asyncio
    async def test_direct_children(self, category_store: InMemoryCategoryStore) -> None:
        """Side menu resolves only direct children."""
        node = await category_store.direct_children(COMPUTERS)
        assert [c.id for c in node.children] == [LAPTOPS]

    @pytest.mark.asyncio
    async def test_uppercase_id_is_accepted(
        self, category_store: InMemoryCategoryStore
    ) -> None:
        """IDs are matched case-insensitively."""
        node = await category_store.direct_children(COMPUTERS.upper())
        assert node.category.id == COMPUTERS

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(
        self, category_store: InMemoryCategoryStore
    ) -> None:
        """A well-formed but unknown ID raises not found."""
        with pytest.raises(CategoryNotFoundError):
            await category_store.ancestor_chain(MISSING)
        with pytest.raises(CategoryNotFoundError):
            await category_store.direct_children(MISSING)

    @pytest.mark.asyncio
    async def test_malformed_id_is_invalid_argument(
        self, category_store: InMemoryCategoryStore
    ) -> None:
        """A malformed ID is rejected, not reported as missing."""
        with pytest.raises(InvalidIdentifierError):
            await category_store.ancestor_chain("xyz")

    @pytest.mark.asyncio
    async def test_dangling_reference_is_skipped(self) -> None:
        """Edge IDs without a stored category are left out."""
        store = InMemoryCategoryStore(
            [
                Category(id=oid(1), name="Root", slug="root", children=[oid(2), MISSING]),
                Category(id=oid(2), name="Child", slug="child", ancestors=[oid(1)]),
            ]
        )
        node = await store.direct_children(oid(1))
        assert [c.id for c in node.children] == [oid(2)]


class TestInMemoryProductStore:
    """Tests for InMemoryProductStore."""

    @pytest.fixture
    def widget_store(self, category_store: InMemoryCategoryStore) -> InMemoryProductStore:
        """Store holding exactly twelve widgets."""
        return InMemoryProductStore(make_widgets(12), categories=category_store)

    @pytest.mark.asyncio
    async def test_window_in_name_order(self, widget_store: InMemoryProductStore) -> None:
        """start=5, qty=3 returns the 6th to 8th names in sorted order."""
        page = await widget_store.list_products(start=5, qty=3)
        expected = sorted(f"Widget-{i}" for i in range(1, 13))[5:8]
        assert page.total == 12
        assert [v.product.name for v in page.data] == expected

    @pytest.mark.asyncio
    async def test_total_independent_of_window(
        self, widget_store: InMemoryProductStore
    ) -> None:
        """Windowing never changes the count."""
        totals = {
            (await widget_store.list_products(start=start, qty=qty)).total
            for start, qty in [(0, 0), (0, 1), (3, 4), (11, 100), (50, 5)]
        }
        assert totals == {12}

    @pytest.mark.asyncio
    async def test_start_past_end_is_empty(self, widget_store: InMemoryProductStore) -> None:
        """start >= total yields no data but the full total."""
        page = await widget_store.list_products(start=12, qty=5)
        assert page.total == 12
        assert page.data == []

    @pytest.mark.asyncio
    async def test_zero_qty_still_counts(self, widget_store: InMemoryProductStore) -> None:
        """qty=0 yields no data but computes the total."""
        page = await widget_store.list_products(start=0, qty=0)
        assert page.total == 12
        assert page.data == []

    @pytest.mark.asyncio
    async def test_negative_window_rejected(self, widget_store: InMemoryProductStore) -> None:
        """Negative start or qty is an invalid argument."""
        with pytest.raises(InvalidArgumentError):
            await widget_store.list_products(start=-1, qty=3)
        with pytest.raises(InvalidArgumentError):
            await widget_store.list_products(start=0, qty=-3)

    @pytest.mark.asyncio
    async def test_products_carry_category_snippet(
        self, widget_store: InMemoryProductStore
    ) -> None:
        """Each product is joined to its category."""
        page = await widget_store.list_products(start=0, qty=1)
        snippet = page.data[0].category
        assert (snippet.id, snippet.name, snippet.slug) == (LAPTOPS, "Laptops", "laptops")

    @pytest.mark.asyncio
    async def test_filter_by_category(self, product_store: InMemoryProductStore) -> None:
        """Only products of the given category are counted and listed."""
        page = await product_store.list_products_by_category(TOYS, start=0, qty=10)
        assert page.total == 4
        assert all(v.product.category_id == TOYS for v in page.data)

    @pytest.mark.asyncio
    async def test_filter_by_unknown_category_is_empty(
        self, product_store: InMemoryProductStore
    ) -> None:
        """An unmatched category ID is an empty page, not an error."""
        page = await product_store.list_products_by_category(MISSING, start=0, qty=10)
        assert page.total == 0
        assert page.data == []

    @pytest.mark.asyncio
    async def test_filter_by_malformed_category_rejected(
        self, product_store: InMemoryProductStore
    ) -> None:
        """A malformed category ID is an invalid argument."""
        with pytest.raises(InvalidIdentifierError):
            await product_store.list_products_by_category("12345", start=0, qty=10)

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_substring(
        self, product_store: InMemoryProductStore
    ) -> None:
        """'drag' matches Dragonfly, dragnet and DRAGON."""
        page = await product_store.search_products("drag", start=0, qty=20)
        assert page.total == 3
        assert {v.product.name for v in page.data} == {"Dragonfly", "dragnet", "DRAGON"}

    @pytest.mark.asyncio
    async def test_search_results_sorted_by_name(
        self, product_store: InMemoryProductStore
    ) -> None:
        """Matches keep name order."""
        page = await product_store.search_products("DRAG", start=0, qty=20)
        names = [v.product.name for v in page.data]
        assert names == sorted(names)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pattern", ["^drag", "drag.*", "DRA[Gx]"])
    async def test_search_pattern_is_regular_expression(
        self, product_store: InMemoryProductStore, pattern: str
    ) -> None:
        """Anchors, wildcards and classes are interpreted, ignoring case."""
        page = await product_store.search_products(pattern, start=0, qty=20)
        assert page.total == 3
        assert {v.product.name for v in page.data} == {"Dragonfly", "dragnet", "DRAGON"}

    @pytest.mark.asyncio
    async def test_search_anchored_at_end(self, product_store: InMemoryProductStore) -> None:
        """'on$' matches only names ending in on."""
        page = await product_store.search_products("on$", start=0, qty=20)
        assert [v.product.name for v in page.data] == ["DRAGON"]

    @pytest.mark.asyncio
    async def test_search_invalid_pattern_rejected(
        self, product_store: InMemoryProductStore
    ) -> None:
        """A pattern that does not compile is an invalid argument."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            await product_store.search_products("drag(", start=0, qty=20)
        assert exc_info.value.details["field"] == "name"

    @pytest.mark.asyncio
    async def test_empty_search_matches_everything(
        self, product_store: InMemoryProductStore
    ) -> None:
        """An empty pattern is the same as listing all products."""
        everything = await product_store.list_products(start=0, qty=100)
        searched = await product_store.search_products("", start=0, qty=100)
        assert searched.total == everything.total
        assert [v.product.id for v in searched.data] == [v.product.id for v in everything.data]

    @pytest.mark.asyncio
    async def test_missing_category_fails_request(self) -> None:
        """A windowed product with an unresolved category is an integrity error."""
        orphan = Product(
            id=oid(0x3000),
            name="Orphan",
            slug="orphan",
            quantity=1,
            value=Decimal("1.00"),
            category_id=MISSING,
        )
        store = InMemoryProductStore(
            make_widgets(2) + [orphan],
            categories=InMemoryCategoryStore(make_categories()),
        )
        with pytest.raises(CategoryIntegrityError) as exc_info:
            await store.list_products(start=0, qty=10)
        assert exc_info.value.details["product_id"] == orphan.id

    @pytest.mark.asyncio
    async def test_missing_category_outside_window_is_not_joined(self) -> None:
        """Only windowed products are joined; the count still includes the orphan."""
        orphan = Product(
            id=oid(0x3000),
            name="Zz Orphan",
            slug="orphan",
            quantity=1,
            value=Decimal("1.00"),
            category_id=MISSING,
        )
        store = InMemoryProductStore(
            make_widgets(2) + [orphan],
            categories=InMemoryCategoryStore(make_categories()),
        )
        page = await store.list_products(start=0, qty=2)
        assert page.total == 3
        assert len(page.data) == 2
