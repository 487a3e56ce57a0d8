import pytest

from WFPutils.schemas.parameter import Parameter, ParameterGroup


DEPLOY_YAML = """\
name: deploy
description: Deploy the service
parameters:
  - name: deploy_env
    description: Deployment environment
    type: choice
    required: true
    choices: [dev, staging, prod]
  - name: prod_confirmation
    description: Confirm production deployment
    type: bool
    required: true
    condition: "deploy_env == 'prod'"
  - name: replicas
    description: Number of replicas
    type: number
    default: 2
    validation:
      min: 1
      max: 10
  - name: features
    description: Optional features
    type: multi_choice
    choices: [metrics, tracing, profiling]
parameter_groups:
  - name: target
    description: Deployment target
    parameters: [deploy_env, prod_confirmation]
"""


@pytest.fixture
def deploy_params():
    return [
        Parameter(
            name="deploy_env",
            description="Deployment environment",
            type="choice",
            required=True,
            choices=["dev", "staging", "prod"],
        ),
        Parameter(
            name="prod_confirmation",
            description="Confirm production deployment",
            type="boolean",
            required=True,
            condition="deploy_env == 'prod'",
        ),
    ]


@pytest.fixture
def ssl_params():
    return [
        Parameter(name="enable_ssl", type="boolean", default=False),
        Parameter(
            name="cert_path",
            type="string",
            required=True,
            condition="enable_ssl == true",
            validation={"pattern": r"^.*\.(pem|crt)$"},
        ),
    ]


@pytest.fixture
def target_group():
    return ParameterGroup(name="target", description="Deployment target",
                          member_names=("deploy_env", "prod_confirmation"))


@pytest.fixture
def deploy_file(tmp_path):
    path = tmp_path / "deploy.yaml"
    path.write_text(DEPLOY_YAML, encoding="utf-8")
    return path
