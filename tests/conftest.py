"""Shared pytest fixtures for typeweave tests."""

from pathlib import Path

import pytest

from typeweave.core.model import (
    ClassRef,
    ClassSpec,
    CollectionType,
    EnumRef,
    EnumSpec,
    EnumValueSpec,
    GenericParameter,
    ModuleSpec,
    TypeModel,
)
from typeweave.generator import DeclarationGenerator

from factories import NUMBER, STRING, prop


@pytest.fixture
def generator() -> DeclarationGenerator:
    return DeclarationGenerator()


@pytest.fixture
def geo_model() -> TypeModel:
    """One module with a class and an enum."""
    return TypeModel(
        modules=[
            ModuleSpec(
                name="Geo",
                classes=[
                    ClassSpec(
                        name="Point",
                        full_name="Geo.Point",
                        properties=[prop("x", NUMBER), prop("y", NUMBER)],
                    )
                ],
                enums=[
                    EnumSpec(
                        name="Color",
                        full_name="Geo.Color",
                        values=[
                            EnumValueSpec(name="Red", value=0),
                            EnumValueSpec(name="Green", value=1),
                        ],
                    )
                ],
            )
        ]
    )


@pytest.fixture
def shop_model() -> TypeModel:
    """Two modules with inheritance, collections, generics and an optional member."""
    common = ModuleSpec(
        name="Common",
        classes=[
            ClassSpec(
                name="Page",
                full_name="Common.Page",
                generic_parameters=[GenericParameter(name="T")],
                properties=[
                    prop("items", CollectionType(items=GenericParameter(name="T"))),
                    prop("total", NUMBER),
                ],
            ),
        ],
    )
    shop = ModuleSpec(
        name="Shop",
        classes=[
            ClassSpec(
                name="Order",
                full_name="Shop.Order",
                base=ClassRef(name="Shop.Entity"),
                properties=[
                    prop("lines", CollectionType(items=ClassRef(name="Shop.OrderLine"))),
                    prop("note", STRING, is_optional=True),
                    prop("status", EnumRef(name="Shop.Status")),
                ],
            ),
            ClassSpec(
                name="Entity",
                full_name="Shop.Entity",
                properties=[prop("id", STRING)],
            ),
            ClassSpec(
                name="OrderLine",
                full_name="Shop.OrderLine",
                properties=[prop("quantity", NUMBER)],
            ),
            ClassSpec(
                name="Catalog",
                full_name="Shop.Catalog",
                properties=[
                    prop(
                        "orders",
                        ClassRef(
                            name="Common.Page",
                            generic_arguments=[ClassRef(name="Shop.Order")],
                        ),
                    ),
                ],
            ),
        ],
        enums=[
            EnumSpec(
                name="Status",
                full_name="Shop.Status",
                values=[
                    EnumValueSpec(name="Open", value=0),
                    EnumValueSpec(name="Closed", value=1),
                ],
            )
        ],
    )
    return TypeModel(modules=[shop, common])


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    """A JSON model document on disk."""
    path = tmp_path / "model.json"
    path.write_text(
        """
{
  "references": ["vendor.d.ts"],
  "modules": [
    {
      "name": "Geo",
      "classes": [
        {
          "name": "Point",
          "full_name": "Geo.Point",
          "properties": [
            {"name": "x", "type": {"kind": "system", "system_kind": "number"}},
            {"name": "tags", "type": {"kind": "collection",
                                      "items": {"kind": "system", "system_kind": "string"}}}
          ]
        }
      ],
      "enums": [
        {
          "name": "Color",
          "full_name": "Geo.Color",
          "values": [{"name": "Red", "value": 0}, {"name": "Green", "value": 1}]
        }
      ]
    }
  ]
}
""",
        encoding="utf-8",
    )
    return path
