"""Lambda handler code shipped as CDK assets."""
