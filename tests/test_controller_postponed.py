"""Test suite for handler scanning under postponed annotation evaluation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typing_extensions import Annotated

from routebind import (
    Body,
    BindingConfigurationError,
    Descriptor,
    Param,
    Query,
    bind_parameters,
    controller,
    get_route_arguments,
)

from sample_pipes import ParseIntPipe

if TYPE_CHECKING:
    from decimal import Decimal


class TestLocalNames:
    """Tests for string annotations naming classes outside module globals."""

    def test_transform_defined_in_enclosing_function(self, registry):
        """Test that a locally defined transform is found by the called decorator."""

        class TrimPipe:
            def transform(self, value, metadata):
                return value.strip()

        @controller(store=registry)
        class SearchController:
            def find(self, term: Annotated[str, Query("q", TrimPipe)]):
                return term

        assert registry.get(SearchController, "find") == {
            "QUERY:0": Descriptor(index=0, data="q", pipes=(TrimPipe,)),
        }

    def test_bare_decorator_sees_enclosing_function(self):
        """Test that the bare decorator form resolves local names too."""

        class TrimPipe:
            def transform(self, value, metadata):
                return value.strip()

        @controller
        class SearchController:
            def find(self, term: Annotated[str, Query(TrimPipe)]):
                return term

        args = get_route_arguments(SearchController, "find")
        assert args["QUERY:0"].pipes == (TrimPipe,)

    def test_transform_nested_in_class(self, registry):
        """Test that names from the class namespace are resolved."""

        @controller(store=registry)
        class ItemsController:
            class SlugPipe:
                def transform(self, value, metadata):
                    return value.lower()

            def get(self, slug: Annotated[str, Param("slug", SlugPipe)]):
                return slug

        args = registry.get(ItemsController, "get")
        assert args["PARAM:0"].pipes == (ItemsController.SlugPipe,)

    def test_bind_parameters_called_directly(self, registry):
        """Test that bind_parameters uses the caller's local names."""

        class UpperPipe:
            def transform(self, value, metadata):
                return value.upper()

        class TagsController:
            def create(self, name: Annotated[str, Body("name", UpperPipe)]):
                return name

        bind_parameters(TagsController, registry)

        assert registry.get(TagsController, "create") == {
            "BODY:0": Descriptor(index=0, data="name", pipes=(UpperPipe,)),
        }

    def test_explicit_namespace(self, registry):
        """Test that an explicit localns supplies the names."""

        class PagesController:
            def index(self, page: Annotated[int, Query("page", PagePipe)]):  # noqa: F821
                return page

        bind_parameters(PagesController, registry, localns={"PagePipe": ParseIntPipe})

        assert registry.get(PagesController, "index")["QUERY:0"].pipes == (
            ParseIntPipe,
        )


class TestUnresolvedAnnotations:
    """Tests for annotations that cannot be evaluated at scan time."""

    def test_type_checking_import_is_skipped(self, registry):
        """Test that an unmarked type imported only for type checkers is ignored."""

        @controller(store=registry)
        class OrdersController:
            def total(self, amount: Decimal, dto: Annotated[dict, Body()]):
                return amount, dto

        assert registry.get(OrdersController, "total") == {
            "BODY:1": Descriptor(index=1),
        }

    def test_unresolvable_marker_raises(self, registry):
        """Test that an Annotated annotation with an unknown name is not dropped."""

        with pytest.raises(BindingConfigurationError) as exc_info:

            @controller(store=registry)
            class BrokenController:
                def find(self, page: Annotated[int, Query(MissingPipe)]):  # noqa: F821
                    return page

        assert "MissingPipe" in str(exc_info.value)
        assert "page" in str(exc_info.value)
        assert registry.handlers() == []
