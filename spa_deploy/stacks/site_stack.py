"""CDK stack for a single SPA deployment pipeline."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from spa_deploy.cdk_constructs import SpaPipelineConstruct
from spa_deploy.config import SiteConfig


class SpaPipelineStack(cdk.Stack):
  """Stack for a single SPA deployment pipeline."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.site = SpaPipelineConstruct(
      self,
      "Site",
      domain_name=site_config.domain,
      repository=site_config.repository,
      build_spec=site_config.build_spec,
      certificate=site_config.certificate,
      hosted_zone=site_config.hosted_zone,
      removal_policy=site_config.removal_policy,
    )

    # Tag resources with owner info
    if site_config.owner:
      cdk.Tags.of(self).add("Owner", site_config.owner)
    cdk.Tags.of(self).add("Project", "spa-pipelines")
    cdk.Tags.of(self).add("Domain", site_config.domain)
