"""Unit tests for CategoryService"""
import pytest
from bson import ObjectId

from src.core.errors import DataValidationError, NotFoundError
from src.models.category import CategoryCreate, CategoryUpdate
from src.services.category_service import CategoryService


def category(name, parent=None):
    return {"_id": ObjectId(), "name": name, "parent_category_id": parent}


class TestCategoryService:

    @pytest.fixture
    def tree(self):
        """root -> child -> grandchild"""
        root = category("Root")
        child = category("Child", root["_id"])
        grandchild = category("Grandchild", child["_id"])
        return {doc["_id"]: doc for doc in (root, child, grandchild)}, root, child, grandchild

    @pytest.fixture
    def service(self, mock_category_repository, mock_product_repository, tree):
        docs = tree[0]

        async def find_by_id(category_id):
            return docs.get(ObjectId(str(category_id)))

        async def find_one_and_update(query, update):
            doc = docs[query["_id"]]
            doc.update(update["$set"])
            return doc

        mock_category_repository.find_by_id.side_effect = find_by_id
        mock_category_repository.find_one_and_update.side_effect = find_one_and_update
        mock_category_repository.find_by_name.return_value = None
        return CategoryService(mock_category_repository, mock_product_repository)

    @pytest.mark.asyncio
    async def test_create_top_level_category(self, service, mock_category_repository):
        mock_category_repository.create.side_effect = lambda doc: {**doc, "_id": ObjectId()}

        result = await service.create_category(CategoryCreate(name="Books"))

        assert result.parent_category_id is None
        stored = mock_category_repository.create.call_args.args[0]
        assert stored["parent_category_id"] is None

    @pytest.mark.asyncio
    async def test_create_with_missing_parent(self, service):
        with pytest.raises(NotFoundError):
            await service.create_category(
                CategoryCreate(name="Orphan", parent_category_id=str(ObjectId()))
            )

    @pytest.mark.asyncio
    async def test_duplicate_name_is_rejected(self, service, mock_category_repository):
        mock_category_repository.find_by_name.return_value = category("Books")

        with pytest.raises(DataValidationError):
            await service.create_category(CategoryCreate(name="Books"))

    @pytest.mark.asyncio
    async def test_reparent_under_descendant_is_rejected(self, service, tree):
        _, root, _, grandchild = tree

        with pytest.raises(DataValidationError):
            await service.update_category(
                str(root["_id"]), CategoryUpdate(parent_category_id=str(grandchild["_id"]))
            )
        assert root["parent_category_id"] is None

    @pytest.mark.asyncio
    async def test_category_cannot_be_its_own_parent(self, service, tree):
        _, _, child, _ = tree

        with pytest.raises(DataValidationError):
            await service.update_category(
                str(child["_id"]), CategoryUpdate(parent_category_id=str(child["_id"]))
            )

    @pytest.mark.asyncio
    async def test_valid_reparent(self, service, tree, mock_category_repository):
        _, root, _, grandchild = tree

        result = await service.update_category(
            str(grandchild["_id"]), CategoryUpdate(parent_category_id=str(root["_id"]))
        )

        assert result.parent_category_id == str(root["_id"])

    @pytest.mark.asyncio
    async def test_null_parent_moves_to_top_level(self, service, tree):
        _, _, child, _ = tree

        result = await service.update_category(
            str(child["_id"]), CategoryUpdate(parent_category_id=None)
        )

        assert result.parent_category_id is None

    @pytest.mark.asyncio
    async def test_null_name_is_rejected(self, service, tree, mock_category_repository):
        _, _, child, _ = tree

        with pytest.raises(DataValidationError):
            await service.update_category(str(child["_id"]), CategoryUpdate(name=None))
        assert child["name"] == "Child"
        mock_category_repository.find_one_and_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_refuses_while_products_reference_it(self, service, tree, mock_product_repository, mock_category_repository):
        _, root, _, _ = tree
        mock_product_repository.has_products_in_category.return_value = True

        with pytest.raises(DataValidationError):
            await service.delete_category(str(root["_id"]))
        mock_category_repository.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_refuses_while_children_exist(self, service, tree, mock_product_repository, mock_category_repository):
        _, root, _, _ = tree
        mock_product_repository.has_products_in_category.return_value = False
        mock_category_repository.has_children.return_value = True

        with pytest.raises(DataValidationError):
            await service.delete_category(str(root["_id"]))

    @pytest.mark.asyncio
    async def test_delete_missing_category(self, service):
        assert await service.delete_category(str(ObjectId())) is False

    @pytest.mark.asyncio
    async def test_top_level_categories(self, service, mock_category_repository, tree):
        _, root, _, _ = tree
        mock_category_repository.find_top_level.return_value = [root]

        result = await service.top_level_categories()

        assert [c.name for c in result] == ["Root"]
