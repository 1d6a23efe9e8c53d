"""S3 buckets for build artifacts and website content."""

from aws_cdk import RemovalPolicy
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_s3 as s3
from constructs import Construct

from ..naming import artifact_bucket_name


class ArtifactBucket(Construct):
  """Private, KMS-encrypted bucket for intermediate pipeline artifacts."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    super().__init__(scope, id)

    self.bucket = s3.Bucket(
      self,
      "Bucket",
      bucket_name=artifact_bucket_name(domain_name),
      encryption=s3.BucketEncryption.KMS_MANAGED,
      public_read_access=False,
      block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
      removal_policy=removal_policy,
      auto_delete_objects=removal_policy == RemovalPolicy.DESTROY,
    )


class WebsiteBucket(Construct):
  """Bucket holding the built site.

  Without CloudFront the bucket is a public S3 website. With CloudFront it
  stays private and only the origin access identity may read from it; the
  read statement is added when the distribution binds its origin.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    private: bool,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    super().__init__(scope, id)

    self.private = private
    self.origin_access_identity: cloudfront.OriginAccessIdentity | None = None

    if private:
      self.bucket = s3.Bucket(
        self,
        "Bucket",
        bucket_name=domain_name,  # bucket name must match the domain
        block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
        removal_policy=removal_policy,
      )
      self.origin_access_identity = cloudfront.OriginAccessIdentity(
        self,
        "OriginAccessIdentity",
        comment=f"Read access to {domain_name}",
      )
    else:
      self.bucket = s3.Bucket(
        self,
        "Bucket",
        bucket_name=domain_name,
        # SPA routing: every unknown path falls back to the app shell
        website_index_document="index.html",
        website_error_document="index.html",
        public_read_access=True,
        block_public_access=s3.BlockPublicAccess(
          block_public_acls=False,
          ignore_public_acls=False,
          block_public_policy=False,
          restrict_public_buckets=False,
        ),
        # the deploy action writes objects with the public-read canned ACL
        object_ownership=s3.ObjectOwnership.BUCKET_OWNER_PREFERRED,
        removal_policy=removal_policy,
      )
