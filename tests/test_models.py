from swagger_extract.parser.extractors import extract_parameters
from swagger_extract.parser.models import (
    BodyRecord,
    Component,
    EndpointInfo,
    EndpointRecord,
    Parameter,
    ResponseRecord,
)


class TestParameter:
    def test_create_by_alias(self):
        p = Parameter(**{"in": "path", "type": "string", "required": "true", "description": "id"})
        assert p.location == "path"
        assert p.param_type == "string"
        assert p.required == "true"

    def test_defaults_are_none(self):
        p = Parameter()
        assert p.model_dump(by_alias=True) == {
            "in": None,
            "type": None,
            "required": None,
            "description": None,
        }


class TestResponseRecord:
    def test_only_populated_fields_serialised(self):
        r = ResponseRecord(example={"id": 1})
        assert r.model_dump(by_alias=True, exclude_unset=True) == {"example": {"id": 1}}

    def test_schema_alias(self):
        r = ResponseRecord(**{"meaning": "OK", "schema": "Pet", "description": "found"})
        assert r.schema_name == "Pet"
        assert r.model_dump(by_alias=True, exclude_unset=True) == {
            "meaning": "OK",
            "schema": "Pet",
            "description": "found",
        }

    def test_null_example_is_kept_when_set(self):
        r = ResponseRecord(example=None)
        assert r.model_dump(exclude_unset=True) == {"example": None}


class TestBodyRecord:
    def test_to_dict_flattens_formats(self):
        body = BodyRecord(
            endpoint=EndpointInfo(type="POST", url="/pets"),
            formats={"json": {"name": "x"}},
        )
        assert body.to_dict() == {
            "endpoint": {"type": "POST", "url": "/pets"},
            "json": {"name": "x"},
        }


class TestEndpointRecord:
    def test_minimal_record(self):
        record = EndpointRecord(name="listPets")
        assert record.to_dict() == {"name": "listPets"}

    def test_full_record_serialisation(self):
        record = EndpointRecord(
            name="createPets",
            code={"shell": "curl x"},
            body=BodyRecord(endpoint=EndpointInfo(type="POST", url="/pets")),
            parameters={"id": Parameter(location="path", param_type="string", required="true")},
            responses={"201": ResponseRecord(meaning="Created")},
            callbacks="cb",
            auth="api_key",
        )
        data = record.to_dict()
        assert data["code"] == {"shell": "curl x"}
        assert data["body"] == {"endpoint": {"type": "POST", "url": "/pets"}}
        assert data["parameters"]["id"]["in"] == "path"
        assert data["parameters"]["id"]["description"] is None
        assert data["responses"] == {"201": {"meaning": "Created"}}

    def test_parameter_shape_does_not_depend_on_construction(self):
        built = EndpointRecord(name="a", parameters={"id": Parameter(location="path")})
        parsed = EndpointRecord(name="a", parameters=extract_parameters("id|path\n"))
        expected = {"in": "path", "type": None, "required": None, "description": None}
        assert built.to_dict()["parameters"]["id"] == expected
        assert parsed.to_dict()["parameters"]["id"] == expected

    def test_components_match_fields(self):
        assert {c.value for c in Component} <= set(EndpointRecord.model_fields)
