"""
Lambda entry point adapter.

Wraps a ``CloudFunction`` into a ``(event, context)`` handler that the Lambda
runtime can call directly, with structured logging, tracing and metrics
applied the same way as every other entry point.
"""

import asyncio
from typing import Any, Callable, Dict

from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from trigger_adapter.handlers.cloud_function import CloudFunction
from trigger_adapter.handlers.utils.observability import logger, metrics, tracer


def lambda_handler(cloud_function: CloudFunction) -> Callable[[Dict[str, Any], LambdaContext], Any]:
    """
    Build a runtime entry point for ``cloud_function``.

    The runtime always delivers a single raw event, so the entry point uses
    the single-argument calling convention regardless of configuration.
    """

    @metrics.log_metrics(capture_cold_start_metric=True)
    @tracer.capture_lambda_handler
    @logger.inject_lambda_context
    def handler(event: Dict[str, Any], context: LambdaContext) -> Any:
        tracer.put_annotation("event_type", cloud_function.options.full_event_type)
        logger.info(
            "Lambda invocation started",
            extra={
                "request_id": context.aws_request_id,
                "function_name": context.function_name,
                "event_type": cloud_function.options.full_event_type,
            },
        )
        metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)

        result = asyncio.run(cloud_function.invoke.invoke_raw(event))

        logger.info("Lambda invocation completed successfully")
        return result

    return handler