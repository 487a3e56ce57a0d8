import pytest

from WFPutils.exceptions import SchemaError
from WFPutils.resolution import GENERAL_GROUP, group_order
from WFPutils.schemas.parameter import Parameter, ParameterGroup


def test_groups_in_declared_order_with_general_last(deploy_params, ssl_params, target_group) -> None:
    security = ParameterGroup(name="security", member_names=("cert_path", "enable_ssl"))
    sections = group_order([security, target_group], deploy_params + ssl_params)

    assert [group.name for group, _ in sections] == ["security", "target"]
    assert [param.name for param in sections[0][1]] == ["cert_path", "enable_ssl"]


def test_ungrouped_parameters_collected_in_general(deploy_params, target_group) -> None:
    params = deploy_params + [Parameter(name="region"), Parameter(name="zone")]
    sections = group_order([target_group], params)
    general, members = sections[-1]
    assert general.name == GENERAL_GROUP
    assert [param.name for param in members] == ["region", "zone"]


def test_no_groups_puts_everything_in_general(deploy_params) -> None:
    [(group, members)] = group_order([], deploy_params)
    assert group.name == GENERAL_GROUP
    assert members == deploy_params


def test_unknown_member_is_a_schema_error(deploy_params) -> None:
    with pytest.raises(SchemaError):
        group_order([ParameterGroup(name="g", member_names=("ghost",))], deploy_params)


def test_group_accepts_parameters_key() -> None:
    group = ParameterGroup.model_validate({"name": "g", "parameters": ["a"]})
    assert group.member_names == ("a",)
