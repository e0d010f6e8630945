"""
Invocation handlers.

- cloud_function: the normalizer and the CloudFunction record
- lambda_entry: runtime entry point wrapping a CloudFunction
- models/env_vars: environment and adapter configuration
- utils/observability: shared logger, tracer and metrics
"""
