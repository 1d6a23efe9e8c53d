"""Continuous deployment pipelines for single-page web apps on AWS."""
