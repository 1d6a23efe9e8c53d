"""Route 53 alias record for the site."""

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as targets
from aws_cdk import aws_s3 as s3
from constructs import Construct

from ..naming import record_name


class DnsRecord(Construct):
  """Single A alias record pointing at CloudFront or the S3 website endpoint."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone: route53.IHostedZone,
    website_bucket: s3.IBucket,
    distribution: cloudfront.IDistribution | None = None,
  ) -> None:
    super().__init__(scope, id)

    if distribution is not None:
      target = route53.RecordTarget.from_alias(targets.CloudFrontTarget(distribution))
    else:
      target = route53.RecordTarget.from_alias(
        targets.BucketWebsiteTarget(website_bucket)
      )

    self.record = route53.ARecord(
      self,
      "ARecord",
      zone=hosted_zone,
      record_name=record_name(domain_name),
      target=target,
    )
