"""Test suite for recording bindings declared in handler signatures."""

from typing import Any, Optional

from typing_extensions import Annotated

from routebind import (
    Body,
    Descriptor,
    Headers,
    Param,
    Query,
    Req,
    Request,
    bind_parameters,
    controller,
    get_route_arguments,
    iter_parameter_bindings,
)

from sample_pipes import ParseIntPipe, ValidationPipe


class TestAnnotatedParameters:
    """Tests for markers placed in typing.Annotated metadata."""

    def test_indices_skip_self(self, registry):
        """Test that the first parameter after self has index 0."""

        @controller(store=registry)
        class CatsController:
            def find(
                self,
                cat_id: Annotated[int, Param("id", ParseIntPipe)],
                page: Annotated[int, Query("page")],
            ):
                return cat_id, page

        assert registry.get(CatsController, "find") == {
            "PARAM:0": Descriptor(index=0, data="id", pipes=(ParseIntPipe,)),
            "QUERY:1": Descriptor(index=1, data="page", pipes=()),
        }

    def test_unmarked_parameters_keep_positions(self, registry):
        """Test that parameters without markers still count toward the index."""

        @controller(store=registry)
        class Handler:
            def update(self, plain, role: Annotated[str, Body("role")]):
                return plain, role

        assert list(registry.get(Handler, "update")) == ["BODY:1"]

    def test_optional_parameter(self, registry):
        """Test markers on parameters defaulting to None."""

        @controller(store=registry)
        class Handler:
            def show(self, request: Annotated[Optional[Any], Req()] = None):
                return request

        assert registry.get(Handler, "show") == {
            "REQUEST:0": Descriptor(index=0, data=None, pipes=())
        }

    def test_multiple_markers_on_one_parameter(self, registry):
        """Test that every marker in the metadata is applied."""

        @controller(store=registry)
        class Handler:
            def find(self, key: Annotated[str, "doc", Query("key"), Param("key")]):
                return key

        assert set(registry.get(Handler, "find")) == {"QUERY:0", "PARAM:0"}

    def test_last_marker_wins_for_same_kind(self, registry):
        """Test that two markers of one kind on one index keep the last."""

        @controller(store=registry)
        class Handler:
            def create(self, dto: Annotated[dict, Body("a"), Body("b", ValidationPipe)]):
                return dto

        assert registry.get(Handler, "create") == {
            "BODY:0": Descriptor(index=0, data="b", pipes=(ValidationPipe,))
        }

    def test_unresolvable_forward_reference(self, registry):
        """Test that evaluated markers are found despite a broken forward ref."""

        @controller(store=registry)
        class Handler:
            def create(self, first: "MissingType", dto: Annotated[dict, Body()]):  # noqa: F821
                return first, dto

        assert list(registry.get(Handler, "create")) == ["BODY:1"]


class TestDefaultMarkers:
    """Tests for markers given as parameter defaults."""

    def test_default_marker(self, registry):
        """Test that a binding used as a default is recorded."""

        @controller(store=registry)
        class Handler:
            def create(self, dto=Body(ValidationPipe), trace=Headers("x-trace-id")):
                return dto, trace

        assert registry.get(Handler, "create") == {
            "BODY:0": Descriptor(index=0, data=None, pipes=(ValidationPipe,)),
            "HEADERS:1": Descriptor(index=1, data="x-trace-id", pipes=()),
        }


class TestMemberKinds:
    """Tests for static methods, class methods and non-callables."""

    def test_staticmethod_counts_from_zero(self, registry):
        """Test that static methods have no bound parameter to skip."""

        @controller(store=registry)
        class Handler:
            @staticmethod
            def ping(request: Annotated[Any, Request()]):
                return request

        assert list(registry.get(Handler, "ping")) == ["REQUEST:0"]

    def test_classmethod_skips_cls(self, registry):
        """Test that class methods skip the cls parameter."""

        @controller(store=registry)
        class Handler:
            @classmethod
            def ping(cls, body: Annotated[dict, Body()]):
                return body

        assert list(registry.get(Handler, "ping")) == ["BODY:0"]

    def test_non_callables_ignored(self, registry):
        """Test that plain class attributes are not scanned."""

        @controller(store=registry)
        class Handler:
            prefix = "/cats"
            marker = Body("role")

        assert len(registry) == 0

    def test_method_without_markers(self, registry):
        """Test that methods without markers get no map."""

        @controller(store=registry)
        class Handler:
            def index(self):
                return []

        assert registry.get(Handler, "index") is None


class TestDecoratorForms:
    """Tests for the controller decorator and bind_parameters."""

    def test_bare_decorator_uses_default_registry(self):
        """Test that @controller without arguments writes to the default registry."""

        @controller
        class Handler:
            def create(self, dto: Annotated[dict, Body()]):
                return dto

        assert get_route_arguments(Handler, "create") == {
            "BODY:0": Descriptor(index=0, data=None, pipes=())
        }

    def test_bind_parameters_returns_class(self, registry):
        """Test that bind_parameters returns the class unchanged."""

        class Handler:
            def create(self, dto: Annotated[dict, Body()]):
                return dto

        assert bind_parameters(Handler, registry) is Handler
        assert Handler().create({"a": 1}) == {"a": 1}

    def test_inherited_methods_not_rescanned(self, registry):
        """Test that only methods declared on the class itself are recorded."""

        @controller(store=registry)
        class Base:
            def create(self, dto: Annotated[dict, Body()]):
                return dto

        @controller(store=registry)
        class Child(Base):
            pass

        assert registry.get(Base, "create") is not None
        assert registry.get(Child, "create") is None

    def test_iter_parameter_bindings(self):
        """Test listing the markers of a single function."""

        def update(self, cat_id: Annotated[int, Param("id")], dto=Body()):
            return cat_id, dto

        assert list(iter_parameter_bindings(update)) == [(0, Param("id")), (1, Body())]
