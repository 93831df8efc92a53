"""
Tests for building the documentation model of a values file.
"""

import json
from textwrap import dedent

import pytest
from valuedoc.core.exceptions import StructuralError
from valuedoc.core.parser import (
    Document,
    DocumentAssembler,
    Property,
    Section,
    load_document,
    loads_document,
)
from valuedoc.core.parser.comment import Comment


def _names(document):
    return [prop.name for prop in document.properties]


def _property(document, name):
    for prop in document.properties:
        if prop.name == name:
            return prop
    raise KeyError(name)


SIMPLE_VALUES = dedent(
    """\
    # Number of replicas
    replicas: 1

    image:
      # Image repository
      repository: "nginx"
      # Pull policy
      pullPolicy: IfNotPresent
    """
)

SECTIONED_VALUES = dedent(
    """\
    # +docs:section=Global
    # Settings shared by every component

    # Number of replicas
    replicas: 1

    # +docs:section=Image
    # Container image settings

    image:
      repository: nginx
    """
)


class TestSections:
    """Section handling."""

    def test_no_directive_gives_single_implicit_section(self):
        document = loads_document(SIMPLE_VALUES)

        assert len(document.sections) == 1
        assert document.sections[0].name == ""
        assert _names(document) == ["replicas", "image.repository", "image.pullPolicy"]

    def test_section_directives_open_sections_in_order(self):
        document = loads_document(SECTIONED_VALUES)

        assert [s.name for s in document.sections] == ["", "Global", "Image"]
        assert document.sections[0].properties == []
        assert [p.name for p in document.sections[1].properties] == ["replicas"]
        assert [p.name for p in document.sections[2].properties] == ["image.repository"]

    def test_section_description(self):
        document = loads_document(SECTIONED_VALUES)

        assert document.sections[1].description == "Settings shared by every component"
        assert document.sections[2].description == "Container image settings"

    def test_nested_section_directive(self):
        text = dedent(
            """\
            config:
              port: 80

              # +docs:section=Other

            other: 1
            """
        )
        document = loads_document(text)

        assert [s.name for s in document.sections] == ["", "Other"]
        assert [p.name for p in document.sections[0].properties] == ["config.port"]
        assert [p.name for p in document.sections[1].properties] == ["other"]

    def test_directives_of_later_documents_are_ignored(self):
        document = loads_document(
            "a: 1\n---\n# +docs:section=Second\n\n# +docs:property=ghost\n\nb: 2\n"
        )

        assert [s.name for s in document.sections] == [""]
        assert _names(document) == ["a"]

    def test_empty_document(self):
        document = loads_document("")

        assert len(document.sections) == 1
        assert document.properties == []


class TestProperties:
    """Properties backed by values."""

    def test_scalar_leaf_is_one_property_named_by_path(self):
        document = loads_document(SIMPLE_VALUES)

        prop = _property(document, "image.repository")
        assert str(prop.description) == "Image repository"
        assert prop.type == "string"
        assert prop.default == "nginx"

        replicas = _property(document, "replicas")
        assert replicas.type == "number"
        assert replicas.default == "1"

    def test_property_without_comment_has_empty_description(self):
        document = loads_document("name: demo\n")

        assert str(_property(document, "name").description) == ""

    def test_empty_containers_are_leaves(self):
        document = loads_document("annotations: {}\nhosts: []\n")

        annotations = _property(document, "annotations")
        assert annotations.type == "object"
        assert annotations.default == "{}"

        hosts = _property(document, "hosts")
        assert hosts.type == "array"
        assert hosts.default == "[]"

    def test_sequence_items_are_indexed(self):
        text = "hosts:\n  - name: a\n    port: 1\n  - b\n"

        assert _names(loads_document(text)) == [
            "hosts[0].name",
            "hosts[0].port",
            "hosts[1]",
        ]

    def test_property_directive_on_container(self):
        text = dedent(
            """\
            # +docs:property
            # Resource requests and limits
            resources:
              limits:
                cpu: 100m
            """
        )
        document = loads_document(text)

        assert _names(document) == ["resources"]
        prop = document.properties[0]
        assert prop.type == "object"
        assert prop.default == "limits:\n  cpu: 100m"
        assert str(prop.description) == "Resource requests and limits"

    @pytest.mark.parametrize(
        "value",
        ["1.0", "{a: 1}", "[a]"],
    )
    def test_explicit_type_and_default_override_inference(self, value):
        text = dedent(
            f"""\
            # +docs:property
            # +docs:type=string
            # +docs:default=latest
            tag: {value}
            """
        )
        prop = _property(loads_document(text), "tag")

        assert prop.type == "string"
        assert prop.default == "latest"

    def test_aliased_values(self):
        text = "base: &b\n  x: 1\ncopy: *b\n"

        assert _names(loads_document(text)) == ["base.x", "copy.x"]

    def test_alias_cycle_aborts(self):
        with pytest.raises(StructuralError):
            loads_document("a: &x\n  - *x\n")


class TestIgnore:
    """The docs:ignore directive."""

    def test_ignored_subtree_contributes_nothing(self):
        text = dedent(
            """\
            # +docs:ignore
            internal:
              secret: abc
              nested:
                value: 1
            visible: true
            """
        )

        assert _names(loads_document(text)) == ["visible"]

    def test_forwarded_comments_still_fire(self):
        text = dedent(
            """\
            # +docs:ignore
            internal:
              secret: abc

            # +docs:section=After

            visible: true
            """
        )
        document = loads_document(text)

        assert [s.name for s in document.sections] == ["", "After"]
        assert [p.name for p in document.sections[1].properties] == ["visible"]
        assert document.sections[0].properties == []

    def test_ignore_wins_over_property(self):
        text = "# +docs:ignore\n# +docs:property\nresources:\n  cpu: 1\n"

        assert _names(loads_document(text)) == []

    def test_ignore_false_is_not_ignored(self):
        assert _names(loads_document("# docs:ignore=false\nname: x\n")) == ["name"]


class TestSyntheticProperties:
    """Properties declared only in comments."""

    def test_name_and_type_from_example(self):
        text = dedent(
            """\
            config:
              port: 80

              # +docs:property
              # Extra environment variables
              # ```yaml
              # extraEnv: []
              # ```

            other: 1
            """
        )
        document = loads_document(text)

        assert _names(document) == ["config.port", "config.extraEnv", "other"]
        prop = _property(document, "config.extraEnv")
        assert prop.type == "array"
        assert prop.default == "undefined"
        assert str(prop.description) == "Extra environment variables"

    def test_explicit_name(self):
        text = "foo: 1\n\n# +docs:property=bar.baz\n# Only documented here\n"
        prop = _property(loads_document(text), "bar.baz")

        assert prop.type == "unknown"
        assert prop.default == "undefined"
        assert str(prop.description) == "Only documented here"

    def test_explicit_name_wins_over_example_key(self):
        text = dedent(
            """\
            foo: 1

            # +docs:property=custom
            # ```
            # example: true
            # ```
            """
        )
        prop = _property(loads_document(text), "custom")

        assert prop.type == "bool"
        assert str(prop.description) == ""

    def test_example_that_is_not_a_single_key_mapping_is_kept(self):
        text = dedent(
            """\
            foo: 1

            # +docs:property=hosts
            # Host names
            # ```yaml
            # - a
            # - b
            # ```
            """
        )
        prop = _property(loads_document(text), "hosts")

        assert prop.type == "unknown"
        assert "```yaml\n- a\n- b\n```" in str(prop.description)

    def test_invalid_example_is_not_fatal(self):
        text = "foo: 1\n\n# +docs:property=broken\n# ```\n# a: [1\n# ```\n"
        prop = _property(loads_document(text), "broken")

        assert prop.type == "unknown"

    def test_unnamed_property_is_dropped_with_warning(self, caplog):
        text = "foo: 1\n\n# +docs:property\n# Nothing to name this by\n"
        document = loads_document(text)

        assert _names(document) == ["foo"]
        assert "Could not determine the name" in caplog.text

    def test_synthetic_property_goes_to_current_section(self):
        text = dedent(
            """\
            # +docs:section=Extras

            foo: 1

            # +docs:property=extra
            """
        )
        document = loads_document(text)

        assert [p.name for p in document.sections[1].properties] == ["foo", "extra"]


class TestDocumentModel:
    """Document helpers and entry points."""

    def test_load_document_from_file(self, tmp_path):
        values = tmp_path / "values.yaml"
        values.write_text(SECTIONED_VALUES, encoding="utf-8")

        document = load_document(values)
        assert _names(document) == ["replicas", "image.repository"]

    def test_to_dict_is_json_serialisable(self):
        data = loads_document(SECTIONED_VALUES).to_dict()
        decoded = json.loads(json.dumps(data))

        replicas = decoded["sections"][1]["properties"][0]
        assert replicas == {
            "name": "replicas",
            "description": "Number of replicas",
            "type": "number",
            "default": "1",
        }

    def test_assembler_section_bookkeeping(self):
        assembler = DocumentAssembler()
        assert assembler.current_section is assembler.document.sections[0]

        assembler.open_section("Extra", "More settings")
        section = assembler.current_section
        prop = Property(name="x", description=Comment(), type="string", default="a")
        assembler.append_property(section, prop)

        assert assembler.current_section is section
        assert assembler.document == Document(
            sections=[Section(), Section("Extra", "More settings", [prop])]
        )
