"""Tests for domain-derived resource names."""

import pytest

from spa_deploy.naming import (
  artifact_bucket_name,
  pipeline_name,
  record_name,
  stack_name,
)


@pytest.mark.parametrize(
  ("domain", "expected"),
  [
    ("demo.example.com", "demo-example-com-artifacts"),
    ("example.com", "example-com-artifacts"),
    ("a.b.c.d.example.co.uk", "a-b-c-d-example-co-uk-artifacts"),
    ("localhost", "localhost-artifacts"),
  ],
)
def test_artifact_bucket_name(domain: str, expected: str) -> None:
  """Every dot becomes a dash, then the suffix is appended."""
  assert artifact_bucket_name(domain) == expected


def test_pipeline_name() -> None:
  assert pipeline_name("www.example.com") == "www-example-com-build-pipeline"


def test_record_name_is_first_label() -> None:
  assert record_name("demo.example.com") == "demo"
  assert record_name("example") == "example"


def test_stack_name() -> None:
  assert stack_name("www.example.com") == "SpaPipeline-www-example-com"
