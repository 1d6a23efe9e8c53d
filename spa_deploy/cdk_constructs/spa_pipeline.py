"""Main composite construct for a single-page app deployment pipeline."""

import logging
from dataclasses import dataclass

from aws_cdk import CfnOutput, RemovalPolicy, SecretValue, Stack, Token
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_codepipeline as codepipeline
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_s3 as s3
from constructs import Construct

from ..config import (
  BuildSpecOption,
  CertificateOption,
  ExistingCertificate,
  HostedZoneConfig,
  RepositoryConfig,
  certificate_option,
  uses_distribution,
  validate_certificate_option,
  validate_certificate_region,
)
from .certificate import resolve_certificate
from .distribution import CloudFrontDistribution
from .dns import DnsRecord
from .invalidation import InvalidationHandler
from .pipeline import DeploymentPipeline
from .storage import ArtifactBucket, WebsiteBucket

logger = logging.getLogger(__name__)


@dataclass
class SiteResources:
  """Handles produced by each phase, read by the phases after it."""

  artifact_bucket: s3.IBucket
  website_bucket: s3.IBucket
  origin_access_identity: cloudfront.IOriginAccessIdentity | None = None
  hosted_zone: route53.IHostedZone | None = None
  certificate: acm.ICertificate | None = None
  distribution: cloudfront.IDistribution | None = None
  dns_record: route53.ARecord | None = None
  invalidation: InvalidationHandler | None = None
  pipeline: codepipeline.Pipeline | None = None


class SpaPipelineConstruct(Construct):
  """Continuous deployment for a single-page app.

  Creates, in order:
  - S3 artifact bucket and website bucket
  - (Optional) ACM certificate and CloudFront distribution
  - (Optional) Route 53 A alias record
  - CodePipeline: pull from GitHub, CodeBuild, deploy to S3 and
    (with CloudFront) invalidate the cache

  Without a certificate the site is a public S3 website. With one, the
  bucket is private and served through CloudFront.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    repository: RepositoryConfig,
    oauth_token: SecretValue | None = None,
    build_spec: BuildSpecOption = None,
    certificate: (
      CertificateOption | acm.ICertificate | bool | str | None
    ) = None,
    hosted_zone: HostedZoneConfig | None = None,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    # True, an ARN string, a certificate construct and None are accepted
    option = certificate_option(certificate)
    # Checked before the construct joins the tree so nothing is half-declared
    validate_certificate_option(option, hosted_zone)
    region = Stack.of(scope).region
    validate_certificate_region(
      option, None if Token.is_unresolved(region) else region
    )

    super().__init__(scope, id)

    self.domain_name = domain_name
    private = uses_distribution(option)

    if isinstance(option, ExistingCertificate) and hosted_zone is None:
      logger.warning(
        f"{domain_name}: certificate supplied without a hosted zone; "
        "CloudFront is created but no DNS record is"
      )

    # Storage
    artifacts = ArtifactBucket(
      self,
      "Artifacts",
      domain_name=domain_name,
      removal_policy=removal_policy,
    )
    website = WebsiteBucket(
      self,
      "Website",
      domain_name=domain_name,
      private=private,
      removal_policy=removal_policy,
    )
    self.resources = SiteResources(
      artifact_bucket=artifacts.bucket,
      website_bucket=website.bucket,
      origin_access_identity=website.origin_access_identity,
    )

    if hosted_zone is not None:
      self.resources.hosted_zone = route53.HostedZone.from_hosted_zone_attributes(
        self,
        "HostedZone",
        hosted_zone_id=hosted_zone.hosted_zone_id,
        zone_name=hosted_zone.zone_name,
      )

    # Certificate and CloudFront
    if private:
      self.resources.certificate = resolve_certificate(
        self,
        "Certificate",
        option=option,
        domain_name=domain_name,
        hosted_zone=self.resources.hosted_zone,
      )
      self.resources.distribution = CloudFrontDistribution(
        self,
        "Distribution",
        bucket=self.resources.website_bucket,
        origin_access_identity=self.resources.origin_access_identity,
        certificate=self.resources.certificate,
        domain_name=domain_name,
      ).distribution

    # DNS
    if self.resources.hosted_zone is not None:
      self.resources.dns_record = DnsRecord(
        self,
        "Dns",
        domain_name=domain_name,
        hosted_zone=self.resources.hosted_zone,
        website_bucket=self.resources.website_bucket,
        distribution=self.resources.distribution,
      ).record

    # Pipeline
    invalidation_action = None
    if self.resources.distribution is not None:
      self.resources.invalidation = InvalidationHandler(self, "Invalidation")
      invalidation_action = self.resources.invalidation.invoke_action(
        self.resources.distribution
      )

    self.deployment = DeploymentPipeline(
      self,
      "Pipeline",
      domain_name=domain_name,
      repository=repository,
      oauth_token=(
        oauth_token if oauth_token is not None else repository.oauth_token()
      ),
      artifact_bucket=self.resources.artifact_bucket,
      website_bucket=self.resources.website_bucket,
      public_read=not private,
      build_spec=build_spec,
      invalidation_action=invalidation_action,
    )
    self.resources.pipeline = self.deployment.pipeline

    logger.info(
      f"{domain_name}: cloudfront={private} "
      f"dns={self.resources.dns_record is not None} "
      f"deploy_actions={len(self.deployment.deploy_actions)}"
    )

    # Outputs
    CfnOutput(
      self,
      "BucketName",
      value=self.resources.website_bucket.bucket_name,
      description="S3 website bucket name",
    )
    CfnOutput(
      self,
      "PipelineName",
      value=self.resources.pipeline.pipeline_name,
      description="CodePipeline name",
    )
    if self.resources.distribution is not None:
      CfnOutput(
        self,
        "DistributionId",
        value=self.resources.distribution.distribution_id,
        description="CloudFront distribution ID",
      )
      CfnOutput(
        self,
        "WebsiteUrl",
        value=f"https://{self.resources.distribution.distribution_domain_name}",
        description="CloudFront distribution URL",
      )
    else:
      CfnOutput(
        self,
        "WebsiteUrl",
        value=self.resources.website_bucket.bucket_website_url,
        description="S3 website endpoint",
      )
