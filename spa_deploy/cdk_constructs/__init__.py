"""CDK constructs for single-page app deployment pipelines."""

from .certificate import DnsValidatedCertificate, resolve_certificate
from .distribution import CloudFrontDistribution
from .dns import DnsRecord
from .invalidation import InvalidationHandler
from .pipeline import DEFAULT_BUILD_SPEC, DeploymentPipeline, resolve_build_spec
from .spa_pipeline import SiteResources, SpaPipelineConstruct
from .storage import ArtifactBucket, WebsiteBucket

__all__ = [
  "DEFAULT_BUILD_SPEC",
  "ArtifactBucket",
  "CloudFrontDistribution",
  "DeploymentPipeline",
  "DnsRecord",
  "DnsValidatedCertificate",
  "InvalidationHandler",
  "SiteResources",
  "SpaPipelineConstruct",
  "WebsiteBucket",
  "resolve_build_spec",
  "resolve_certificate",
]
