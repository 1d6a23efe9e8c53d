"""CloudFront cache invalidation as a CodePipeline Lambda action."""

from pathlib import Path

from aws_cdk import Duration
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_codepipeline_actions as codepipeline_actions
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

HANDLER_DIR = Path(__file__).parent.parent / "handlers" / "invalidate_cache"


class InvalidationHandler(Construct):
  """Lambda invoked from the deploy stage to invalidate the CloudFront cache.

  The distribution id reaches the function as the action's user parameters,
  and the function reports the job result back to CodePipeline.
  """

  def __init__(self, scope: Construct, id: str) -> None:
    super().__init__(scope, id)

    self.handler = lambda_.Function(
      self,
      "Handler",
      runtime=lambda_.Runtime.PYTHON_3_12,
      handler="index.handler",
      code=lambda_.Code.from_asset(
        str(HANDLER_DIR), exclude=["__pycache__", "*.pyc"]
      ),
      timeout=Duration.seconds(30),
    )

    self.handler.add_to_role_policy(
      iam.PolicyStatement(
        effect=iam.Effect.ALLOW,
        actions=[
          "codepipeline:PutJobSuccessResult",
          "cloudfront:CreateInvalidation",
        ],
        resources=["*"],  # job ids are not known at deploy time
      )
    )

  def invoke_action(
    self,
    distribution: cloudfront.IDistribution,
    run_order: int = 2,
  ) -> codepipeline_actions.LambdaInvokeAction:
    """Pipeline action that invalidates ``distribution`` after the copy."""
    return codepipeline_actions.LambdaInvokeAction(
      action_name="invalidate-cache",
      lambda_=self.handler,
      user_parameters_string=distribution.distribution_id,
      run_order=run_order,
    )
