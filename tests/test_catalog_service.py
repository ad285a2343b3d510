"""
==============================================================================
Catalog Service Tests
==============================================================================

Tests for the listing pipeline, search, statistics and CRUD orchestration.

==============================================================================
"""

import pytest

from app.catalog.catalog import ProductCatalog
from app.core.exceptions import AppException, ErrorKind
from app.schemas.product import ProductQuery, parse_positive_int
from app.services.catalog_service import CatalogService, to_fixed


class TestListingPipeline:
    """Tests for CatalogService.list_products."""

    def test_no_filters(self, service: CatalogService):
        result = service.list_products(ProductQuery())
        assert len(result.products) == 5
        assert result.pagination.total_pages == 1

    def test_filters_combine_before_pagination(self, service: CatalogService):
        """Test totals reflect category, stock and search filters together."""
        result = service.list_products(
            ProductQuery(category="electronics", in_stock=True, search="wireless", limit=1)
        )
        assert [p.name for p in result.products] == ["Wireless Mouse"]
        assert result.pagination.total_products == 1
        assert result.pagination.total_pages == 1

    def test_zero_matches(self, service: CatalogService):
        result = service.list_products(ProductQuery(category="Garden"))
        assert result.products == []
        assert result.pagination.total_products == 0
        assert result.pagination.total_pages == 0
        assert result.pagination.has_next is False
        assert result.pagination.has_prev is False

    def test_five_products_limit_two_page_three(self, service: CatalogService):
        result = service.list_products(ProductQuery(page=3, limit=2))
        assert len(result.products) == 1
        assert result.products[0].name == "Wireless Mouse"
        assert result.pagination.current_page == 3
        assert result.pagination.total_pages == 3
        assert result.pagination.has_next is False
        assert result.pagination.has_prev is True

    def test_middle_page(self, service: CatalogService):
        result = service.list_products(ProductQuery(page=2, limit=2))
        assert [p.name for p in result.products] == ["Coffee Maker", "Ergonomic Office Chair"]
        assert result.pagination.has_next is True
        assert result.pagination.has_prev is True

    def test_out_of_range_page_is_empty(self, service: CatalogService):
        result = service.list_products(ProductQuery(page=10, limit=2))
        assert result.products == []
        assert result.pagination.total_products == 5
        assert result.pagination.has_prev is True

    def test_search_matches_category(self, service: CatalogService):
        result = service.list_products(ProductQuery(search="KITCHEN"))
        assert [p.name for p in result.products] == ["Coffee Maker"]

    def test_out_of_stock_filter(self, service: CatalogService):
        result = service.list_products(ProductQuery(in_stock=False))
        assert [p.name for p in result.products] == ["Coffee Maker"]


class TestQueryParsing:
    """Tests for raw query-string parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 7), ("3", 3), (" 4 ", 4), ("+5", 5), ("abc", 7), ("", 7),
            ("2.5", 2), ("3abc", 3), ("0.9", 7), ("0", 7), ("-1", 7),
        ],
    )
    def test_parse_positive_int(self, raw, expected):
        assert parse_positive_int(raw, 7) == expected

    def test_from_params_defaults(self):
        query = ProductQuery.from_params()
        assert query == ProductQuery(page=1, limit=10)

    def test_from_params_in_stock(self):
        assert ProductQuery.from_params(in_stock="true").in_stock is True
        assert ProductQuery.from_params(in_stock="TRUE").in_stock is False
        assert ProductQuery.from_params(in_stock="").in_stock is False
        assert ProductQuery.from_params().in_stock is None

    def test_from_params_empty_strings_do_not_filter(self):
        query = ProductQuery.from_params(category="", search="")
        assert query.category is None
        assert query.search is None


class TestSearch:
    """Tests for CatalogService.search."""

    def test_case_insensitive_name_match(self, service: CatalogService):
        result = service.search("LAPTOP")
        assert result.count == 1
        assert result.results[0].name == "Gaming Laptop"

    def test_description_match(self, service: CatalogService):
        result = service.search("lumbar")
        assert [p.name for p in result.results] == ["Ergonomic Office Chair"]

    def test_category_not_searched(self, service: CatalogService):
        assert service.search("Furniture").count == 0

    def test_results_are_unpaginated(self, service: CatalogService):
        # "e" appears in every seed product
        assert service.search("e").count == 5

    @pytest.mark.parametrize("q", [None, ""])
    def test_query_required(self, service: CatalogService, q):
        with pytest.raises(AppException) as exc_info:
            service.search(q)
        assert exc_info.value.kind is ErrorKind.VALIDATION


class TestStatistics:
    """Tests for CatalogService.get_stats."""

    def test_seed_stats(self, service: CatalogService):
        stats = service.get_stats()
        assert stats.total_products == 5
        assert stats.in_stock_count == 4
        assert stats.out_of_stock_count == 1
        assert stats.category_counts == {"Electronics": 3, "Kitchen": 1, "Furniture": 1}
        assert stats.average_price == "513.99"
        assert stats.total_value == "2569.95"

    def test_empty_catalog_stats(self, empty_catalog: ProductCatalog):
        stats = CatalogService(empty_catalog).get_stats()
        assert stats.total_products == 0
        assert stats.average_price == 0
        assert stats.total_value == "0.00"
        assert stats.category_counts == {}

    def test_two_decimal_formatting(self, empty_catalog: ProductCatalog, valid_payload: dict):
        service = CatalogService(empty_catalog)
        for price in (1, 1, 2):
            service.create_product({**valid_payload, "price": price})
        stats = service.get_stats()
        assert stats.total_value == "4.00"
        assert stats.average_price == "1.33"

    def test_exact_tie_rounds_up(self, empty_catalog: ProductCatalog, valid_payload: dict):
        service = CatalogService(empty_catalog)
        for price in (1.25, 1):
            service.create_product({**valid_payload, "price": price})
        stats = service.get_stats()
        assert stats.average_price == "1.13"
        assert stats.total_value == "2.25"

    @pytest.mark.parametrize(
        "value, expected",
        [(1.125, "1.13"), (0.125, "0.13"), (2.675, "2.67"), (4, "4.00"), (0.0, "0.00")],
    )
    def test_to_fixed(self, value, expected):
        assert to_fixed(value) == expected


class TestCrudOrchestration:
    """Tests for create, update and delete through the service."""

    def test_create_then_get(self, service: CatalogService, valid_payload: dict):
        product = service.create_product(valid_payload)
        assert service.get_product(product.id) == product
        assert product.name == "Desk Lamp"

    def test_invalid_create_leaves_catalog_untouched(self, service: CatalogService):
        with pytest.raises(AppException):
            service.create_product({"name": "a", "price": -5})
        assert service.get_stats().total_products == 5

    def test_update_replaces_all_fields(self, service: CatalogService, valid_payload: dict):
        target = service.list_products(ProductQuery()).products[0]
        updated = service.update_product(target.id, {**valid_payload, "inStock": False})
        assert updated.id == target.id
        assert updated.in_stock is False
        assert service.get_product(target.id).category == "Home"

    def test_update_validates_before_lookup(self, service: CatalogService):
        with pytest.raises(AppException) as exc_info:
            service.update_product("missing", {})
        assert exc_info.value.kind is ErrorKind.VALIDATION

    def test_delete(self, service: CatalogService):
        target = service.list_products(ProductQuery()).products[0]
        service.delete_product(target.id)
        with pytest.raises(AppException) as exc_info:
            service.get_product(target.id)
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
