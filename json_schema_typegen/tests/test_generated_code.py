"""
Tests that import generated modules and decode JSON data with them.
"""

import pytest

from json_schema_typegen.pipeline import SchemaMapping
from json_schema_typegen.pipeline.schema_ast import SchemaParser
from json_schema_typegen.runtime import DecodeError, InvalidEnumValue, RequiredFieldMissing


def generated_module(make_generator, import_generated, schema: dict, file_name: str = "test.json"):
    generator = make_generator()
    generator.add_document(file_name, SchemaParser().from_dict(schema))
    return import_generated(generator.sources(), "models")


@pytest.fixture
def person_module(make_generator, schema_dir, import_generated):
    generator = make_generator()
    generator.process(schema_dir / "person.schema.json")
    return import_generated(generator.sources(), "models")


class TestStructs:
    def test_required_and_optional(self, person_module):
        person = person_module.Person.from_json({"name": "Ada"})
        assert person.Name == "Ada"
        assert person.Age is None
        assert person.Tags is None
        assert person.Address is None

    def test_default_applied_when_absent(self, person_module):
        assert person_module.Person.from_json({"name": "Ada"}).Count == 10
        assert person_module.Person.from_json({"name": "Ada", "count": None}).Count == 10

    def test_explicit_value_beats_default(self, person_module):
        assert person_module.Person.from_json({"name": "Ada", "count": 0}).Count == 0

    @pytest.mark.parametrize("data", [{"age": 5}, {"name": None}])
    def test_required_field_missing(self, person_module, data):
        with pytest.raises(RequiredFieldMissing, match="field name: required"):
            person_module.Person.from_json(data)

    @pytest.mark.parametrize(
        "data",
        [[], {"name": 5}, {"name": "Ada", "age": "36"}, {"name": "Ada", "tags": "a"}, {"name": "Ada", "address": 1}],
    )
    def test_wrong_shapes(self, person_module, data):
        with pytest.raises(DecodeError):
            person_module.Person.from_json(data)

    def test_nested_struct(self, person_module):
        person = person_module.Person.from_json({"name": "Ada", "address": {"street": "Main St"}})
        assert person.Address == person_module.Address(Street="Main St")
        with pytest.raises(RequiredFieldMissing):
            person_module.Person.from_json({"name": "Ada", "address": {"zip": "1234"}})

    def test_to_json(self, person_module):
        data = {
            "name": "Ada",
            "age": 36,
            "status": "active",
            "level": 1,
            "tags": ["math"],
            "address": {"street": "Main St"},
        }
        assert person_module.Person.from_json(data).to_json() == {**data, "count": 10}

    def test_docstring(self, person_module):
        assert person_module.Person.__doc__ == "A person known to the address book."

    def test_mutable_default_not_shared(self, make_generator, import_generated):
        models = generated_module(
            make_generator,
            import_generated,
            {"properties": {"tags": {"type": "array", "items": {"type": "string"}, "default": ["a"]}}},
        )
        first, second = models.Test(), models.Test()
        first.Tags.append("b")
        assert second.Tags == ["a"]
        assert models.Test.from_json({}).Tags == ["a"]

    def test_object_default(self, make_generator, import_generated):
        models = generated_module(
            make_generator,
            import_generated,
            {
                "properties": {
                    "point": {"type": "object", "properties": {"x": {"type": "integer"}}, "default": {"x": 1}},
                }
            },
        )
        assert models.Test.from_json({}).Point == models.TestPoint(X=1)
        assert models.Test.from_json({"point": {"x": 2}}).Point.X == 2

    def test_map_field(self, make_generator, import_generated):
        models = generated_module(
            make_generator,
            import_generated,
            {"properties": {"extra": {"type": "object"}}, "required": ["extra"]},
        )
        assert models.Test.from_json({"extra": {"a": [1]}}).Extra == {"a": [1]}
        with pytest.raises(DecodeError):
            models.Test.from_json({"extra": [1]})

    def test_yaml_schema(self, make_generator, schema_dir, import_generated):
        generator = make_generator()
        generator.process(schema_dir / "pet.yaml")
        models = import_generated(generator.sources(), "models")
        pet = models.Pet.from_json({"name": "Rex", "kind": "dog", "weight": 3})
        assert pet.Kind is models.PetKindEnum.DOG
        assert pet.Weight == 3.0 and isinstance(pet.Weight, float)


class TestEnums:
    def test_allowed_value(self, person_module):
        person = person_module.Person.from_json({"name": "Ada", "level": 2})
        assert person.Level is person_module.PersonLevelEnum.VALUE_2

    def test_rejected_value(self, person_module):
        with pytest.raises(InvalidEnumValue) as info:
            person_module.Person.from_json({"name": "Ada", "level": 4})
        assert info.value.allowed == [1, 2, 3]

    def test_string_constants(self, person_module):
        assert person_module.PersonStatusEnumActive is person_module.PersonStatusEnum.ACTIVE
        assert person_module.PersonStatusEnum.from_json("inactive") == "inactive"
        assert person_module.ENUM_VALUES_PersonStatusEnum == ["active", "inactive"]

    def test_number_enum(self, make_generator, import_generated):
        models = generated_module(make_generator, import_generated, {"properties": {"ratio": {"enum": [0.5, 1]}}})
        assert models.TestRatioEnum.from_json(1) is models.TestRatioEnum.VALUE_1
        assert models.TestRatioEnum.VALUE_0_5.to_json() == 0.5

    def test_boolean_enum(self, make_generator, import_generated):
        models = generated_module(make_generator, import_generated, {"properties": {"flag": {"enum": [True]}}})
        assert models.TestFlagEnum.from_json(True) is models.TestFlagEnum.TRUE
        with pytest.raises(InvalidEnumValue):
            models.TestFlagEnum.from_json(1)

    def test_carrier(self, make_generator, import_generated):
        models = generated_module(make_generator, import_generated, {"properties": {"mixed": {"enum": ["a", 1, None]}}})
        assert models.TestMixedEnum.from_json(1).Value == 1
        assert models.TestMixedEnum.from_json(None).to_json() is None
        with pytest.raises(InvalidEnumValue):
            models.TestMixedEnum.from_json(True)


class TestAliasesAndRecursion:
    def test_alias(self, make_generator, import_generated):
        models = generated_module(
            make_generator,
            import_generated,
            {
                "definitions": {
                    "Names": {"type": "array", "items": {"type": "string"}},
                    "Holder": {"properties": {"names": {"$ref": "#/definitions/Names"}}, "required": ["names"]},
                }
            },
        )
        holder = models.Holder.from_json({"names": ["a", "b"]})
        assert holder.Names == ["a", "b"]
        assert holder.to_json() == {"names": ["a", "b"]}
        with pytest.raises(DecodeError):
            models.decode_Names(["a", 1])

    def test_recursive_alias(self, make_generator, import_generated):
        models = generated_module(
            make_generator,
            import_generated,
            {"definitions": {"Tree": {"type": "array", "items": {"$ref": "#/definitions/Tree"}}}},
        )
        assert models.decode_Tree([[], [[]]]) == [[], [[]]]
        assert models.encode_Tree([[]]) == [[]]

    def test_cycle_through_reference(self, make_generator, import_generated):
        models = generated_module(
            make_generator,
            import_generated,
            {
                "definitions": {
                    "Node": {"$ref": "#/definitions/Tree"},
                    "Tree": {"properties": {"kids": {"type": "array", "items": {"$ref": "#/definitions/Node"}}}},
                }
            },
        )
        tree = models.Tree.from_json({"kids": [{"kids": []}]})
        assert tree.Kids == [models.Tree(Kids=[])]
        assert models.decode_Node({"kids": []}) == models.Tree(Kids=[])
        with pytest.raises(DecodeError):
            models.Tree.from_json({"kids": [5]})

    def test_recursive_struct(self, make_generator, schema_dir, import_generated):
        generator = make_generator()
        generator.process(schema_dir / "tree.json")
        models = import_generated(generator.sources(), "models")
        data = {"label": "root", "children": [{"label": "leaf"}], "parent": {"label": "up"}}
        node = models.Node.from_json(data)
        assert node.Children[0].Label == "leaf"
        assert node.Parent.Parent is None
        assert node.to_json() == data


class TestCrossPackage:
    def test_import_between_packages(self, make_generator, schema_dir, import_generated):
        generator = make_generator(
            schema_mappings=[
                SchemaMapping(schema_id="https://example.com/a.json", package_name="pkga", output_name="pkga.py"),
                SchemaMapping(schema_id="https://example.com/b.json", package_name="pkgb", output_name="pkgb.py"),
            ]
        )
        generator.process(schema_dir / "cross" / "a.json")
        pkga = import_generated(generator.sources(), "pkga")

        a = pkga.A.from_json({"foo": {"x": "1"}, "name": "n"})
        assert a.Foo == pkga.pkgb.Foo(X="1")
        assert a.to_json() == {"foo": {"x": "1"}, "name": "n"}
        with pytest.raises(RequiredFieldMissing):
            pkga.A.from_json({"name": "n"})

    def test_reference_within_one_package(self, make_generator, schema_dir, import_generated):
        generator = make_generator()
        generator.process(schema_dir / "cross" / "a.json")
        models = import_generated(generator.sources(), "models")

        a = models.A.from_json({"foo": {"x": "1"}})
        assert a.Foo == models.Foo(X="1")
        assert a.to_json()["foo"] == {"x": "1"}
