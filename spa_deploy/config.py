"""Configuration loader for single-page application deployment pipelines."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from aws_cdk import RemovalPolicy, SecretValue
from aws_cdk import aws_certificatemanager as acm

# CloudFront only reads viewer certificates from this region
CLOUDFRONT_CERTIFICATE_REGION = "us-east-1"


class ConfigurationError(ValueError):
  """Raised when a site configuration cannot be assembled."""


class MissingHostedZoneError(ConfigurationError):
  """Certificate generation was requested without a hosted zone."""

  def __init__(self) -> None:
    super().__init__(
      "If you'd like a certificate then you must provide a `hosted_zone`."
    )


class CertificateRegionError(ConfigurationError):
  """The certificate would live outside the region CloudFront reads from."""

  def __init__(self, region: str) -> None:
    super().__init__(
      f"CloudFront only accepts ACM certificates from "
      f"{CLOUDFRONT_CERTIFICATE_REGION}, but this certificate is in {region}. "
      f"Deploy the site to {CLOUDFRONT_CERTIFICATE_REGION} or pass a "
      f"certificate created there."
    )


@dataclass(frozen=True)
class NoCertificate:
  """Serve the site straight from the S3 website endpoint."""


@dataclass(frozen=True)
class GenerateCertificate:
  """Create a DNS-validated ACM certificate (requires a hosted zone)."""


@dataclass(frozen=True)
class ExistingCertificate:
  """Reuse an ACM certificate that already exists.

  Give either its ARN or a certificate construct, e.g. one returned by
  ``acm.Certificate.from_certificate_arn``.
  """

  certificate_arn: str | None = None
  certificate: acm.ICertificate | None = None

  def __post_init__(self) -> None:
    if not self.certificate_arn and self.certificate is None:
      raise ConfigurationError(
        "ExistingCertificate needs a `certificate_arn` or a `certificate`."
      )


CertificateOption = NoCertificate | GenerateCertificate | ExistingCertificate

# None -> default build spec, dict -> inline document, str -> file in source tree
BuildSpecOption = dict[str, Any] | str | None


def certificate_option(value: Any) -> CertificateOption:
  """Map a raw value (bool, ARN string, certificate or None) to a CertificateOption."""
  if isinstance(
    value, (NoCertificate, GenerateCertificate, ExistingCertificate)
  ):
    return value
  if value is None or value is False:
    return NoCertificate()
  if value is True:
    return GenerateCertificate()
  if isinstance(value, str) and value:
    return ExistingCertificate(certificate_arn=value)
  # jsii interface proxies don't support isinstance, so match on the attribute
  if not isinstance(value, (str, bool)) and hasattr(value, "certificate_arn"):
    return ExistingCertificate(certificate=value)
  raise ConfigurationError(f"Unrecognized certificate value: {value!r}")


def uses_distribution(certificate: CertificateOption) -> bool:
  """Whether the site is fronted by CloudFront (any certificate at all)."""
  return not isinstance(certificate, NoCertificate)


def validate_certificate_option(
  certificate: CertificateOption, hosted_zone: "HostedZoneConfig | None"
) -> None:
  """Fail fast when a certificate must be generated but there is no zone."""
  if isinstance(certificate, GenerateCertificate) and hosted_zone is None:
    raise MissingHostedZoneError()


def _arn_region(arn: str) -> str | None:
  parts = arn.split(":")
  if len(parts) < 6 or parts[0] != "arn":
    return None
  return parts[3] or None


def validate_certificate_region(
  certificate: CertificateOption, region: str | None
) -> None:
  """Fail fast when CloudFront would be handed a certificate from elsewhere.

  ``region`` is where a generated certificate would be created; pass None
  when it is not known at synth time. An existing certificate is checked
  against the region in its ARN, if the ARN is a literal.
  """
  if isinstance(certificate, GenerateCertificate):
    certificate_region = region
  elif isinstance(certificate, ExistingCertificate):
    arn = certificate.certificate_arn
    if arn is None and certificate.certificate is not None:
      arn = certificate.certificate.certificate_arn
    certificate_region = _arn_region(arn) if isinstance(arn, str) else None
  else:
    return

  if certificate_region and certificate_region != CLOUDFRONT_CERTIFICATE_REGION:
    raise CertificateRegionError(certificate_region)


@dataclass(frozen=True)
class RepositoryConfig:
  """GitHub repository the pipeline pulls from."""

  owner: str
  repo: str
  branch: str = "master"
  oauth_token_secret: str = "github-oauth-token"

  def oauth_token(self) -> SecretValue:
    """Secrets Manager reference for the GitHub OAuth token."""
    return SecretValue.secrets_manager(self.oauth_token_secret)


@dataclass(frozen=True)
class HostedZoneConfig:
  """Attributes used to import an existing Route 53 hosted zone."""

  hosted_zone_id: str
  zone_name: str


@dataclass(frozen=True)
class SiteConfig:
  """Configuration for a single SPA deployment pipeline."""

  domain: str
  repository: RepositoryConfig
  build_spec: BuildSpecOption = None
  certificate: CertificateOption = field(default_factory=NoCertificate)
  hosted_zone: HostedZoneConfig | None = None
  removal_policy: RemovalPolicy = RemovalPolicy.RETAIN
  region: str = "us-east-1"
  account: str | None = None
  owner: str = ""

  @property
  def uses_distribution(self) -> bool:
    return uses_distribution(self.certificate)


_REMOVAL_POLICIES = {
  "retain": RemovalPolicy.RETAIN,
  "destroy": RemovalPolicy.DESTROY,
  "snapshot": RemovalPolicy.SNAPSHOT,
}


@dataclass
class Config:
  """Multi-site configuration."""

  sites: list[SiteConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "Config":
    """Load configuration from YAML file."""
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults = data.get("defaults", {})
    sites: list[SiteConfig] = []

    for site_data in data.get("sites", []):
      # Merge defaults with site-specific config
      merged = {**defaults, **site_data}
      sites.append(_site_from_dict(merged))

    return cls(sites=sites)


def _site_from_dict(data: dict[str, Any]) -> SiteConfig:
  domain = data.get("domain")
  if not domain:
    raise ConfigurationError("Every site needs a `domain`.")

  repo_data = data.get("repository")
  if not repo_data:
    raise ConfigurationError(f"Site {domain} needs a `repository`.")

  repository = RepositoryConfig(
    owner=repo_data["owner"],
    repo=repo_data["repo"],
    branch=repo_data.get("branch", "master"),
    oauth_token_secret=repo_data.get("oauth_token_secret", "github-oauth-token"),
  )

  zone_data = data.get("hosted_zone")
  hosted_zone = None
  if zone_data:
    hosted_zone = HostedZoneConfig(
      hosted_zone_id=zone_data["id"],
      zone_name=zone_data["name"],
    )

  # Convert removal_policy string to enum
  removal_policy_str = str(data.get("removal_policy", "retain"))
  removal_policy = _REMOVAL_POLICIES.get(
    removal_policy_str.lower(), RemovalPolicy.RETAIN
  )

  certificate = certificate_option(data.get("certificate"))
  region = data.get("region", "us-east-1")
  validate_certificate_region(certificate, region)

  return SiteConfig(
    domain=domain,
    repository=repository,
    build_spec=data.get("build_spec"),
    certificate=certificate,
    hosted_zone=hosted_zone,
    removal_policy=removal_policy,
    region=region,
    account=data.get("account"),
    owner=data.get("owner", ""),
  )
