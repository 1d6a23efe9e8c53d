"""Pytest fixtures for CDK construct tests."""

import aws_cdk as cdk
import pytest

from spa_deploy.config import HostedZoneConfig, RepositoryConfig


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(app, "TestStack", env=cdk.Environment(region="us-east-1"))


@pytest.fixture
def repository() -> RepositoryConfig:
  """GitHub repository used by every test pipeline."""
  return RepositoryConfig(owner="octo", repo="public_site")


@pytest.fixture
def hosted_zone() -> HostedZoneConfig:
  """Existing hosted zone for example.com."""
  return HostedZoneConfig(hosted_zone_id="ABCDEFGHIJKLMN", zone_name="example.com")
