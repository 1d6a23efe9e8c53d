"""Resource names derived from the site domain."""


def dashed(domain_name: str) -> str:
  return domain_name.replace(".", "-")


def artifact_bucket_name(domain_name: str) -> str:
  """Name of the private bucket holding pipeline artifacts."""
  return f"{dashed(domain_name)}-artifacts"


def pipeline_name(domain_name: str) -> str:
  return f"{dashed(domain_name)}-build-pipeline"


def record_name(domain_name: str) -> str:
  """Route 53 record name: the first label of the domain."""
  return domain_name.split(".")[0]


def stack_name(domain_name: str) -> str:
  return f"SpaPipeline-{dashed(domain_name)}"
