"""Unit tests for the CloudFront invalidation Lambda handler."""

from typing import Any
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from spa_deploy.handlers.invalidate_cache import index


def _job(job_id: str = "job-123", distribution_id: str = "E2EXAMPLE") -> dict[str, Any]:
  return {
    "id": job_id,
    "data": {
      "actionConfiguration": {
        "configuration": {
          "FunctionName": "invalidate",
          "UserParameters": distribution_id,
        }
      }
    },
  }


@pytest.fixture
def codepipeline() -> MagicMock:
  """Mock CodePipeline client."""
  return MagicMock()


@pytest.fixture
def cloudfront() -> MagicMock:
  """Mock CloudFront client that accepts invalidations."""
  client = MagicMock()
  client.create_invalidation.return_value = {"Invalidation": {"Id": "I123"}}
  return client


class TestProcessJob:
  """Tests for process_job."""

  def test_invalidates_all_paths(
    self, codepipeline: MagicMock, cloudfront: MagicMock
  ) -> None:
    """Test the distribution from UserParameters is fully invalidated."""
    index.process_job(_job(), codepipeline=codepipeline, cloudfront=cloudfront)

    cloudfront.create_invalidation.assert_called_once_with(
      DistributionId="E2EXAMPLE",
      InvalidationBatch={
        "Paths": {"Quantity": 1, "Items": ["/*"]},
        "CallerReference": "job-123",
      },
    )

  def test_reports_success(
    self, codepipeline: MagicMock, cloudfront: MagicMock
  ) -> None:
    """Test the job is marked successful."""
    index.process_job(_job(), codepipeline=codepipeline, cloudfront=cloudfront)

    codepipeline.put_job_success_result.assert_called_once_with(jobId="job-123")
    codepipeline.put_job_failure_result.assert_not_called()

  def test_reports_failure_on_client_error(
    self, codepipeline: MagicMock, cloudfront: MagicMock
  ) -> None:
    """Test a CloudFront error fails the job instead of hanging the pipeline."""
    cloudfront.create_invalidation.side_effect = ClientError(
      {"Error": {"Code": "NoSuchDistribution", "Message": "missing"}},
      "CreateInvalidation",
    )

    index.process_job(_job(), codepipeline=codepipeline, cloudfront=cloudfront)

    codepipeline.put_job_success_result.assert_not_called()
    codepipeline.put_job_failure_result.assert_called_once()
    kwargs = codepipeline.put_job_failure_result.call_args.kwargs
    assert kwargs["jobId"] == "job-123"
    assert kwargs["failureDetails"]["type"] == "JobFailed"
    assert "NoSuchDistribution" in kwargs["failureDetails"]["message"]

  def test_reports_failure_on_missing_user_parameters(
    self, codepipeline: MagicMock, cloudfront: MagicMock
  ) -> None:
    """Test a malformed job is failed rather than left to time out."""
    job = _job()
    del job["data"]["actionConfiguration"]["configuration"]["UserParameters"]

    index.process_job(job, codepipeline=codepipeline, cloudfront=cloudfront)

    cloudfront.create_invalidation.assert_not_called()
    codepipeline.put_job_success_result.assert_not_called()
    codepipeline.put_job_failure_result.assert_called_once()
    kwargs = codepipeline.put_job_failure_result.call_args.kwargs
    assert kwargs["jobId"] == "job-123"
    assert kwargs["failureDetails"]["type"] == "ConfigurationError"
    assert "UserParameters" in kwargs["failureDetails"]["message"]


class TestHandler:
  """Tests for the Lambda entry point."""

  def test_unwraps_codepipeline_event(
    self,
    monkeypatch: pytest.MonkeyPatch,
    codepipeline: MagicMock,
    cloudfront: MagicMock,
  ) -> None:
    """Test the job is read from the CodePipeline.job key."""
    clients = {"codepipeline": codepipeline, "cloudfront": cloudfront}
    monkeypatch.setattr(index.boto3, "client", lambda name: clients[name])

    index.handler({"CodePipeline.job": _job(job_id="job-9")}, None)

    codepipeline.put_job_success_result.assert_called_once_with(jobId="job-9")
