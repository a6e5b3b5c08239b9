"""Unit tests for Template resolution and caching."""

from __future__ import annotations

import pydantic
import pytest

from clauseql.builder import SqlBuilder
from clauseql.errors import ParameterError, UnresolvedMarkerError
from clauseql.options import TemplateOptions


def test_missing_where_group_resolves_to_empty(builder: SqlBuilder):
    builder.select("id").select("name")
    template = builder.add_template("SELECT /**select**/ FROM t /**where**/")
    assert template.sql == "SELECT id , name\n FROM t "


def test_where_and_or(builder: SqlBuilder):
    template = builder.add_template("SELECT * FROM t /**where**/")
    builder.where("a = :a", a=1).or_where("b = :b", b=2).where("c = 3")
    assert template.sql == "SELECT * FROM t WHERE a = :a OR b = :b AND c = 3\n"
    assert template.parameters.to_dict() == {"a": 1, "b": 2}


def test_group_placement_independent_of_append_order():
    text = "SELECT /**select**/ FROM t /**where**/ /**orderby**/"

    first = SqlBuilder()
    first.select("id").where("a = 1").order_by("id")
    second = SqlBuilder()
    second.order_by("id").where("a = 1").select("id")

    assert first.add_template(text).sql == second.add_template(text).sql
    assert first.add_template(text).sql == (
        "SELECT id\n FROM t WHERE a = 1\n ORDER BY id\n"
    )


def test_every_occurrence_of_a_marker_is_replaced(builder: SqlBuilder):
    builder.select("id")
    template = builder.add_template("SELECT /**select**/ UNION SELECT /**select**/")
    assert template.sql == "SELECT id\n UNION SELECT id\n"


def test_resolution_is_cached_between_mutations(builder: SqlBuilder):
    builder.select("id", p=1)
    template = builder.add_template("SELECT /**select**/ FROM t")
    first = template.resolve()
    assert template.resolve() is first
    assert template.sql is first.sql
    assert template.parameters is first.params


def test_any_mutation_invalidates_cache(builder: SqlBuilder):
    builder.select("id")
    template = builder.add_template("SELECT /**select**/ FROM t")
    first = template.resolve()
    builder.add_clause("unused", "x")
    second = template.resolve()
    assert second is not first
    assert second.seq == builder.seq == 2
    assert second.sql == first.sql


def test_templates_read_builder_state_at_resolution_time(builder: SqlBuilder):
    before = builder.add_template("SELECT * FROM t /**where**/")
    after = builder.add_template("SELECT * FROM t /**where**/")
    builder.where("a = 1")
    assert before.sql == "SELECT * FROM t WHERE a = 1\n"
    builder.where("b = 2")
    assert after.sql == "SELECT * FROM t WHERE a = 1 AND b = 2\n"
    assert before.sql == after.sql


def test_params_of_groups_without_marker_are_merged(builder: SqlBuilder):
    template = builder.add_template("SELECT 1")
    assert "p" not in template.parameters
    builder.order_by("x", p=1)
    assert template.sql == "SELECT 1"
    assert template.parameters["p"] == 1


def test_add_parameters_has_no_textual_effect(builder: SqlBuilder):
    builder.add_parameters(tenant="acme")
    template = builder.add_template("SELECT * FROM t WHERE tenant = :tenant")
    assert template.sql == "SELECT * FROM t WHERE tenant = :tenant"
    assert template.parameters.to_dict() == {"tenant": "acme"}


def test_initial_params_seed_and_are_overridden(builder: SqlBuilder):
    template = builder.add_template("SELECT /**where**/", {"a": 0, "b": 0})
    builder.where("a = :a", a=1)
    assert template.parameters.to_dict() == {"a": 1, "b": 0}


def test_leftover_markers_are_stripped(builder: SqlBuilder):
    template = builder.add_template(
        "SELECT * FROM t /**innerjoin**/ /** multi\n line **/ /**orderby**/"
    )
    assert template.sql == "SELECT * FROM t   "


def test_malformed_marker_left_as_text(builder: SqlBuilder):
    template = builder.add_template("SELECT 1 /** unterminated")
    assert template.sql == "SELECT 1 /** unterminated"


def test_keep_policy_leaves_unknown_markers(builder: SqlBuilder):
    builder.select("id")
    template = builder.add_template(
        "SELECT /**select**/ FROM t /**where**/ /**orderby**/",
        options=TemplateOptions(unresolved_markers="keep"),
    )
    assert template.sql == "SELECT id\n FROM t  /**orderby**/"


def test_error_policy_reports_unknown_markers(builder: SqlBuilder):
    template = builder.add_template(
        "SELECT * FROM t /**where**/ /**orderby**/ /** limit **/",
        options=TemplateOptions(unresolved_markers="error"),
    )
    with pytest.raises(UnresolvedMarkerError) as exc_info:
        template.resolve()
    assert exc_info.value.details == {"markers": ["orderby", "limit"]}
    assert exc_info.value.to_error_response()["error"] == "UNRESOLVED_MARKER"

    builder.order_by("id")
    with pytest.raises(UnresolvedMarkerError, match="'limit'"):
        template.resolve()


def test_error_policy_accepts_missing_where_group(builder: SqlBuilder):
    template = builder.add_template(
        "SELECT * FROM t /**where**/",
        options=TemplateOptions(unresolved_markers="error"),
    )
    assert template.sql == "SELECT * FROM t "


def test_template_options_validation():
    with pytest.raises(pydantic.ValidationError):
        TemplateOptions(unresolved_markers="ignore")
    with pytest.raises(pydantic.ValidationError):
        TemplateOptions(strict=True)


@pytest.mark.parametrize(
    "method, fragments, marker, expected",
    [
        ("order_by", ["a", "b DESC"], "orderby", "ORDER BY a , b DESC\n"),
        ("group_by", ["a", "b"], "groupby", "\nGROUP BY a , b\n"),
        ("having", ["COUNT(*) > 1", "SUM(x) > 2"], "having",
         "HAVING COUNT(*) > 1\nAND SUM(x) > 2\n"),
        ("set", ["a = :a", "b = :b"], "set", "SET a = :a , b = :b\n"),
        ("join", ["b ON b.id = a.id"], "join", "\nJOIN b ON b.id = a.id\n"),
        ("inner_join", ["b USING (id)", "c USING (id)"], "innerjoin",
         "\nINNER JOIN b USING (id)\nINNER JOIN c USING (id)\n"),
        ("left_join", ["b USING (id)"], "leftjoin", "\nLEFT JOIN b USING (id)\n"),
        ("right_join", ["b USING (id)"], "rightjoin", "\nRIGHT JOIN b USING (id)\n"),
        ("intersect", ["SELECT 1", "SELECT 2"], "intersect",
         "\n SELECT 1\nINTERSECT\n SELECT 2\n"),
    ],
)
def test_clause_wrappers(builder, method, fragments, marker, expected):
    for sql in fragments:
        getattr(builder, method)(sql)
    template = builder.add_template(f"/**{marker}**/")
    assert template.sql == expected


def test_merge_runtime_params(builder: SqlBuilder):
    builder.where("tenant = :tenant AND id = :id", tenant="default", id=7)
    resolved = builder.add_template("SELECT * FROM t /**where**/").resolve()
    assert resolved.merge_runtime_params({"tenant": "acme"}) == {
        "tenant": "acme",
        "id": 7,
    }


def test_cached_parameters_are_read_only(builder: SqlBuilder):
    builder.where("a = :a", a=1)
    template = builder.add_template("SELECT * FROM t /**where**/")
    params = template.parameters
    with pytest.raises(ParameterError):
        params["a"] = 99
    with pytest.raises(ParameterError):
        params.add_dynamic_params({"injected": 1})
    assert template.parameters is params
    assert template.parameters.to_dict() == {"a": 1}


def test_initial_params_are_not_shared_with_cache(builder: SqlBuilder):
    template = builder.add_template("SELECT 1", a=1)
    first = template.parameters
    builder.select("id", b=2)
    assert template.parameters.to_dict() == {"a": 1, "b": 2}
    assert first.to_dict() == {"a": 1}
