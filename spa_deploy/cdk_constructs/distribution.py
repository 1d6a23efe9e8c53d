"""CloudFront distribution for the private website bucket."""

from aws_cdk import Duration
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct


class CloudFrontDistribution(Construct):
  """CloudFront distribution with the website bucket as its only origin.

  Binding the origin grants the origin access identity ``s3:GetObject`` on
  the bucket through a single bucket policy statement.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    origin_access_identity: cloudfront.IOriginAccessIdentity,
    certificate: acm.ICertificate,
    domain_name: str,
  ) -> None:
    super().__init__(scope, id)

    self.distribution = cloudfront.Distribution(
      self,
      "Distribution",
      default_behavior=cloudfront.BehaviorOptions(
        origin=origins.S3BucketOrigin.with_origin_access_identity(
          bucket,
          origin_access_identity=origin_access_identity,
        ),
        viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
        allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD,
        cached_methods=cloudfront.CachedMethods.CACHE_GET_HEAD,
      ),
      domain_names=[domain_name],
      certificate=certificate,
      default_root_object="index.html",
      # Client-side routes are not objects in the bucket
      error_responses=[
        cloudfront.ErrorResponse(
          http_status=status,
          response_http_status=200,
          response_page_path="/index.html",
          ttl=Duration.seconds(0),
        )
        for status in (403, 404)
      ],
      minimum_protocol_version=cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021,
    )
