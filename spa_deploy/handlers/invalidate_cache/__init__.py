"""CloudFront invalidation step for the deploy stage."""
