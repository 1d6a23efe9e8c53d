"""CDK stacks for single-page app deployment pipelines."""

from .site_stack import SpaPipelineStack

__all__ = ["SpaPipelineStack"]
