"""CodePipeline that pulls, builds and deploys the single-page app."""

from typing import Any

from aws_cdk import SecretValue
from aws_cdk import aws_codebuild as codebuild
from aws_cdk import aws_codepipeline as codepipeline
from aws_cdk import aws_codepipeline_actions as codepipeline_actions
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from constructs import Construct

from ..config import BuildSpecOption, RepositoryConfig
from ..naming import pipeline_name

DEFAULT_BUILD_SPEC: dict[str, Any] = {
  "version": "0.2",
  "phases": {
    "install": {
      "runtime-versions": {
        "nodejs": "20",
      },
    },
    "build": {
      "commands": [
        "npm install",
        "npm run build",
      ],
    },
  },
  "artifacts": {
    "files": ["**/*"],
    "base-directory": "dist",
  },
}


def resolve_build_spec(build_spec: BuildSpecOption) -> codebuild.BuildSpec:
  """Inline document, filename in the source tree, or the default spec."""
  if isinstance(build_spec, dict):
    return codebuild.BuildSpec.from_object(build_spec)
  if isinstance(build_spec, str) and build_spec:
    return codebuild.BuildSpec.from_source_filename(build_spec)
  return codebuild.BuildSpec.from_object(DEFAULT_BUILD_SPEC)


class DeploymentPipeline(Construct):
  """Three-stage pipeline: pull -> build -> deploy.

  The deploy stage copies the built site into the website bucket and, when
  an invalidation action is given, runs it after the copy has finished.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    repository: RepositoryConfig,
    oauth_token: SecretValue,
    artifact_bucket: s3.IBucket,
    website_bucket: s3.IBucket,
    public_read: bool,
    build_spec: BuildSpecOption = None,
    invalidation_action: codepipeline_actions.LambdaInvokeAction | None = None,
  ) -> None:
    super().__init__(scope, id)

    source_artifact = codepipeline.Artifact("source-code")
    compiled_site = codepipeline.Artifact("built-site")

    self.project = codebuild.PipelineProject(
      self,
      "BuildProject",
      build_spec=resolve_build_spec(build_spec),
      environment=codebuild.BuildEnvironment(
        build_image=codebuild.LinuxBuildImage.AMAZON_LINUX_2_5,
        compute_type=codebuild.ComputeType.SMALL,
        privileged=True,
      ),
    )

    # Must agree with how the website bucket was declared
    access_control = (
      s3.BucketAccessControl.PUBLIC_READ
      if public_read
      else s3.BucketAccessControl.PRIVATE
    )

    self.deploy_actions: list[codepipeline.IAction] = [
      codepipeline_actions.S3DeployAction(
        action_name="copy-files",
        bucket=website_bucket,
        input=compiled_site,
        extract=True,
        access_control=access_control,
        run_order=1,
      )
    ]
    if invalidation_action is not None:
      self.deploy_actions.append(invalidation_action)

    self.pipeline = codepipeline.Pipeline(
      self,
      "Pipeline",
      artifact_bucket=artifact_bucket,
      pipeline_name=pipeline_name(domain_name),
      stages=[
        codepipeline.StageProps(
          stage_name="pull",
          actions=[
            codepipeline_actions.GitHubSourceAction(
              action_name="pull-from-github",
              owner=repository.owner,
              repo=repository.repo,
              branch=repository.branch,
              oauth_token=oauth_token,
              output=source_artifact,
            )
          ],
        ),
        codepipeline.StageProps(
          stage_name="build",
          actions=[
            codepipeline_actions.CodeBuildAction(
              action_name="build",
              project=self.project,
              input=source_artifact,
              outputs=[compiled_site],
            )
          ],
        ),
        codepipeline.StageProps(
          stage_name="deploy",
          actions=self.deploy_actions,
        ),
      ],
    )

    self.pipeline.add_to_role_policy(
      iam.PolicyStatement(
        effect=iam.Effect.ALLOW,
        actions=[
          "s3:DeleteObject*",
          "s3:PutObject*",
          "s3:Abort*",
        ],
        resources=[
          website_bucket.bucket_arn,
          website_bucket.arn_for_objects("*"),
        ],
      )
    )
