#!/usr/bin/env python3
"""CDK application entry point for SPA deployment pipelines."""

import logging
import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from spa_deploy.config import Config
from spa_deploy.naming import stack_name
from spa_deploy.stacks.site_stack import SpaPipelineStack

logger = logging.getLogger(__name__)


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def main() -> None:
  """Create CDK app with a pipeline stack for each configured site."""
  logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
  app = cdk.App()

  # Load configuration
  config_path = app.node.try_get_context("config") or "sites.yaml"
  config = Config.from_yaml(Path(config_path))
  logger.info(f"Loaded {len(config.sites)} site(s) from {config_path}")

  default_account: str | None = None

  for site in config.sites:
    account = site.account
    if account is None:
      # Only ask STS when some site leaves the account unset
      if default_account is None:
        default_account = get_account_id()
      account = default_account

    SpaPipelineStack(
      app,
      stack_name(site.domain),
      site_config=site,
      env=cdk.Environment(
        account=account,
        region=site.region,
      ),
      description=f"CI/CD pipeline for the {site.domain} single-page app",
    )

  app.synth()


if __name__ == "__main__":
  main()
