"""CodePipeline action: invalidate every path of a CloudFront distribution.

The distribution id is passed as the action's UserParameters.
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def handler(event: dict[str, Any], context: Any) -> None:
  """Lambda entry point."""
  process_job(
    event["CodePipeline.job"],
    codepipeline=boto3.client("codepipeline"),
    cloudfront=boto3.client("cloudfront"),
  )


def process_job(job: dict[str, Any], *, codepipeline: Any, cloudfront: Any) -> None:
  """Invalidate the distribution named in ``job`` and report the job result."""
  job_id = job["id"]

  try:
    distribution_id = job["data"]["actionConfiguration"]["configuration"][
      "UserParameters"
    ]
  except (KeyError, TypeError) as e:
    logger.exception(f"Job {job_id}: no distribution id in UserParameters")
    codepipeline.put_job_failure_result(
      jobId=job_id,
      failureDetails={
        "type": "ConfigurationError",
        "message": f"Missing UserParameters: {e!r}",
      },
    )
    return

  logger.info(f"Job {job_id}: invalidating distribution {distribution_id}")

  try:
    response = cloudfront.create_invalidation(
      DistributionId=distribution_id,
      InvalidationBatch={
        "Paths": {"Quantity": 1, "Items": ["/*"]},
        # one invalidation per pipeline job
        "CallerReference": job_id,
      },
    )
  except ClientError as e:
    logger.exception(f"Job {job_id}: invalidation failed")
    codepipeline.put_job_failure_result(
      jobId=job_id,
      failureDetails={"type": "JobFailed", "message": str(e)},
    )
    return

  logger.info(f"Created invalidation: {response['Invalidation']['Id']}")
  codepipeline.put_job_success_result(jobId=job_id)
