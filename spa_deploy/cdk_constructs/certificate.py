"""ACM certificate for the CloudFront distribution."""

from aws_cdk import Stack, Token
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_route53 as route53
from constructs import Construct

from ..config import (
  CertificateOption,
  ExistingCertificate,
  GenerateCertificate,
  MissingHostedZoneError,
  validate_certificate_region,
)


class DnsValidatedCertificate(Construct):
  """ACM certificate with DNS validation (no email approval needed)."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone: route53.IHostedZone,
  ) -> None:
    super().__init__(scope, id)

    self.certificate = acm.Certificate(
      self,
      "Certificate",
      domain_name=domain_name,
      validation=acm.CertificateValidation.from_dns(hosted_zone),
    )


def resolve_certificate(
  scope: Construct,
  id: str,
  *,
  option: CertificateOption,
  domain_name: str,
  hosted_zone: route53.IHostedZone | None,
) -> acm.ICertificate | None:
  """Generate or import the certificate selected by ``option``.

  Returns None for NoCertificate. A certificate object handed in through
  ExistingCertificate is returned as is.
  """
  region = Stack.of(scope).region
  validate_certificate_region(
    option, None if Token.is_unresolved(region) else region
  )

  if isinstance(option, GenerateCertificate):
    if hosted_zone is None:
      raise MissingHostedZoneError()
    return DnsValidatedCertificate(
      scope, id, domain_name=domain_name, hosted_zone=hosted_zone
    ).certificate
  if isinstance(option, ExistingCertificate):
    if option.certificate is not None:
      return option.certificate
    return acm.Certificate.from_certificate_arn(scope, id, option.certificate_arn)
  return None
