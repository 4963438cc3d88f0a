"""Tests for ProductRepository query building and stock updates"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from src.core.errors import DataValidationError, StoreUnavailableError
from src.models.common import SortOrder
from src.models.product import ProductFilter, ProductSort, ProductSortField
from src.repositories.product_repository import ProductRepository


@pytest.fixture
def repository(mock_collection):
    return ProductRepository(mock_collection)


class TestBuildFilterQuery:

    def test_no_filter(self, repository):
        assert repository.build_filter_query(None) == {}

    def test_all_predicates_are_combined(self, repository):
        category_id = ObjectId()
        query = repository.build_filter_query(
            ProductFilter(
                category_id=str(category_id),
                min_price=10,
                max_price=50,
                brand="Acme",
                in_stock=True,
                tags=["a", "b"],
                is_active=True,
            )
        )

        assert query == {
            "category_id": category_id,
            "price": {"$gte": 10, "$lte": 50},
            "brand": "Acme",
            "stock": {"$gt": 0},
            "tags": {"$in": ["a", "b"]},
            "is_active": True,
        }

    def test_single_price_bound(self, repository):
        assert repository.build_filter_query(ProductFilter(max_price=20)) == {"price": {"$lte": 20}}

    def test_invalid_category_id(self, repository):
        with pytest.raises(DataValidationError):
            repository.build_filter_query(ProductFilter(category_id="not-an-id"))


class TestBuildSort:

    def test_rating_sorts_on_average(self):
        sort = ProductSort(field=ProductSortField.RATING, order=SortOrder.DESC)
        assert ProductRepository.build_sort(sort) == [("rating.average", DESCENDING)]

    def test_default_direction_is_ascending(self):
        assert ProductRepository.build_sort(ProductSort(field=ProductSortField.PRICE)) == [("price", ASCENDING)]

    def test_no_sort(self):
        assert ProductRepository.build_sort(None) is None


class TestSearch:

    @pytest.mark.asyncio
    async def test_search_text_is_matched_literally(self, repository, mock_collection):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[])
        mock_collection.find.return_value = cursor

        await repository.search_products("c++(pro)")

        query = mock_collection.find.call_args.args[0]
        name_clause = query["$or"][0]["name"]
        assert name_clause["$regex"] == r"c\+\+\(pro\)"
        assert name_clause["$options"] == "i"
        assert {"description", "tags"} <= {next(iter(c)) for c in query["$or"]}


class TestStockUpdates:

    @pytest.mark.asyncio
    async def test_decrement_is_conditional_on_available_stock(self, repository, mock_collection):
        product_id = ObjectId()
        mock_collection.find_one_and_update.return_value = None

        result = await repository.decrement_stock(product_id, 3)

        assert result is None
        query, update = mock_collection.find_one_and_update.call_args.args
        assert query == {"_id": product_id, "stock": {"$gte": 3}}
        assert update["$inc"] == {"stock": -3}

    @pytest.mark.asyncio
    async def test_increment(self, repository, mock_collection):
        product_id = ObjectId()
        mock_collection.find_one_and_update.return_value = {"_id": product_id, "stock": 7}

        result = await repository.increment_stock(str(product_id), 2)

        assert result["stock"] == 7
        query, update = mock_collection.find_one_and_update.call_args.args
        assert query == {"_id": product_id}
        assert update["$inc"] == {"stock": 2}


class TestStoreErrors:

    @pytest.mark.asyncio
    async def test_connection_failure_is_transient(self, repository, mock_collection):
        mock_collection.find_one.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repository.find_by_sku("SKU-1")
        assert exc_info.value.details == {"transient": True}

    @pytest.mark.asyncio
    async def test_duplicate_key_is_validation_error(self, repository, mock_collection):
        mock_collection.insert_one.side_effect = DuplicateKeyError(
            "dup", code=11000, details={"keyValue": {"sku": "SKU-1"}}
        )

        with pytest.raises(DataValidationError) as exc_info:
            await repository.create({"sku": "SKU-1"})
        assert exc_info.value.details == {"field": "sku"}
