"""Tests for the type model and its validation."""

from pathlib import Path

import pytest

from typeweave.core.errors import ModelError
from typeweave.core.model import (
    ClassRef,
    ClassSpec,
    CollectionType,
    EnumRef,
    EnumSpec,
    EnumValueSpec,
    GenericParameter,
    ModuleSpec,
    SystemType,
    SystemTypeKind,
    TypeModel,
    load_model,
    walk_type,
)

from factories import STRING, prop


def _model(*classes: ClassSpec, enums: list[EnumSpec] | None = None) -> TypeModel:
    return TypeModel(modules=[ModuleSpec(name="M", classes=list(classes), enums=enums or [])])


class TestTypeNodes:
    """Type reference nodes."""

    def test_collection_rank_and_leaf(self) -> None:
        node = CollectionType(
            items=CollectionType(items=ClassRef(name="M.Item"), dimension=2),
        )

        assert node.rank == 3
        assert node.leaf == ClassRef(name="M.Item")

    def test_dimension_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            CollectionType(items=STRING, dimension=0)

    def test_date_keyword(self) -> None:
        assert SystemTypeKind.DATE.keyword == "Date"
        assert SystemTypeKind.BOOLEAN.keyword == "boolean"

    def test_walk_type_pierces_collections_and_generics(self) -> None:
        node = ClassRef(
            name="M.Page",
            generic_arguments=[CollectionType(items=EnumRef(name="M.Kind"))],
        )

        kinds = [n.kind for n in walk_type(node)]

        assert kinds == ["class", "collection", "enum"]

    def test_nodes_are_immutable(self) -> None:
        node = SystemType(system_kind=SystemTypeKind.STRING)
        with pytest.raises(ValueError):
            node.system_kind = SystemTypeKind.NUMBER

    def test_discriminated_union_from_json(self) -> None:
        spec = ClassSpec.model_validate(
            {
                "name": "Box",
                "full_name": "M.Box",
                "generic_parameters": [{"name": "T"}],
                "properties": [
                    {"name": "value", "type": {"kind": "generic_parameter", "name": "T"}},
                ],
            }
        )

        assert spec.properties[0].type == GenericParameter(name="T")
        assert spec.as_ref().generic_arguments == [GenericParameter(name="T")]


class TestLookup:
    """Index lookups on a valid model."""

    def test_get_class_and_module(self, shop_model: TypeModel) -> None:
        order = shop_model.get_class("Shop.Order")

        assert order.name == "Order"
        assert shop_model.module_of(order).name == "Shop"
        assert shop_model.module_of(ClassRef(name="Common.Page")).name == "Common"
        assert shop_model.module_of(EnumRef(name="Shop.Status")).name == "Shop"

    def test_unknown_lookup_raises(self, shop_model: TypeModel) -> None:
        with pytest.raises(ModelError, match="Unknown class"):
            shop_model.get_class("Shop.Missing")
        with pytest.raises(ModelError, match="Unknown enum"):
            shop_model.get_enum("Shop.Missing")

    def test_declarations_are_indexed(self, shop_model: TypeModel) -> None:
        assert {c.full_name for c in shop_model.classes} == {
            "Shop.Order",
            "Shop.Entity",
            "Shop.OrderLine",
            "Shop.Catalog",
            "Common.Page",
        }
        assert [e.full_name for e in shop_model.enums] == ["Shop.Status"]

    def test_reachable_enums(self, shop_model: TypeModel) -> None:
        assert [e.full_name for e in shop_model.reachable_enums()] == ["Shop.Status"]

    def test_ignored_classes_do_not_reach_enums(self) -> None:
        model = _model(
            ClassSpec(
                name="Hidden",
                full_name="M.Hidden",
                is_ignored=True,
                properties=[prop("kind", EnumRef(name="M.Kind"))],
            ),
            enums=[EnumSpec(name="Kind", full_name="M.Kind")],
        )

        assert model.reachable_enums() == []

    def test_self_reference_is_allowed(self) -> None:
        model = _model(
            ClassSpec(
                name="Node",
                full_name="M.Node",
                properties=[
                    prop("parent", ClassRef(name="M.Node"), is_optional=True),
                    prop("children", CollectionType(items=ClassRef(name="M.Node"))),
                ],
            )
        )

        assert model.get_class("M.Node").name == "Node"


class TestValidation:
    """Invariants enforced when a model is constructed."""

    def test_base_cycle(self) -> None:
        with pytest.raises(ModelError, match="Inheritance cycle"):
            _model(
                ClassSpec(name="A", full_name="M.A", base=ClassRef(name="M.B")),
                ClassSpec(name="B", full_name="M.B", base=ClassRef(name="M.A")),
            )

    def test_interface_cycle(self) -> None:
        with pytest.raises(ModelError, match="M.A -> M.C -> M.A|M.C -> M.A -> M.C"):
            _model(
                ClassSpec(
                    name="A",
                    full_name="M.A",
                    is_interface=True,
                    interfaces=[ClassRef(name="M.C")],
                ),
                ClassSpec(
                    name="C",
                    full_name="M.C",
                    is_interface=True,
                    interfaces=[ClassRef(name="M.A")],
                ),
            )

    def test_class_inheriting_itself(self) -> None:
        with pytest.raises(ModelError, match="M.A -> M.A"):
            _model(ClassSpec(name="A", full_name="M.A", base=ClassRef(name="M.A")))

    def test_duplicate_interfaces(self) -> None:
        with pytest.raises(ModelError, match="Duplicate interfaces"):
            _model(
                ClassSpec(name="I", full_name="M.I", is_interface=True),
                ClassSpec(
                    name="A",
                    full_name="M.A",
                    interfaces=[ClassRef(name="M.I"), ClassRef(name="M.I")],
                ),
            )

    def test_undeclared_class_reference(self) -> None:
        with pytest.raises(ModelError, match="undeclared class 'M.Missing'"):
            _model(
                ClassSpec(
                    name="A",
                    full_name="M.A",
                    properties=[prop("other", CollectionType(items=ClassRef(name="M.Missing")))],
                )
            )

    def test_undeclared_enum_reference(self) -> None:
        with pytest.raises(ModelError, match="undeclared enum 'M.Kind'"):
            _model(ClassSpec(name="A", full_name="M.A", properties=[prop("kind", EnumRef(name="M.Kind"))]))

    def test_duplicate_enum_values(self) -> None:
        with pytest.raises(ModelError, match="Duplicate enum value names"):
            _model(
                enums=[
                    EnumSpec(
                        name="Kind",
                        full_name="M.Kind",
                        values=[EnumValueSpec(name="A", value=0), EnumValueSpec(name="A", value=1)],
                    )
                ]
            )

    def test_duplicate_declaration(self) -> None:
        with pytest.raises(ModelError, match="Duplicate declaration"):
            _model(
                ClassSpec(name="A", full_name="M.A"),
                enums=[EnumSpec(name="A", full_name="M.A")],
            )

    def test_duplicate_module(self) -> None:
        with pytest.raises(ModelError, match="Duplicate module 'M'"):
            TypeModel(modules=[ModuleSpec(name="M"), ModuleSpec(name="M")])

    def test_error_context_names_location(self) -> None:
        with pytest.raises(ModelError) as exc_info:
            _model(ClassSpec(name="A", full_name="M.A", base=ClassRef(name="M.Gone")))

        assert str(exc_info.value).startswith("module M: M.A: ")
        assert exc_info.value.context.type_name == "M.A"


class TestLoadModel:
    """JSON model documents."""

    def test_load(self, model_file: Path) -> None:
        model = load_model(model_file)

        assert model.references == ["vendor.d.ts"]
        point = model.get_class("Geo.Point")
        assert [p.name for p in point.properties] == ["x", "tags"]
        assert isinstance(point.properties[1].type, CollectionType)
        assert model.get_enum("Geo.Color").values[1].value == 1

    def test_malformed_document(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text('{"modules": [{"classes": [{"name": "A"}]}]}', encoding="utf-8")

        with pytest.raises(ModelError, match="Invalid model document"):
            load_model(path)

    def test_invalid_model_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "cycle.json"
        path.write_text(
            '{"modules": [{"name": "M", "classes": ['
            '{"name": "A", "full_name": "M.A", "base": {"kind": "class", "name": "M.A"}}'
            "]}]}",
            encoding="utf-8",
        )

        with pytest.raises(ModelError, match="Inheritance cycle"):
            load_model(path)