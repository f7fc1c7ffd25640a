"""LambdaRescheduler: Self-invocation for AWS Lambda deployments.

Lambda has no delayed invoke, so the delay travels in the payload as
``delaySeconds`` and the next invocation waits before running its cycle.
"""

import json
import logging
import os
from typing import Any

import boto3

from .Rescheduler import Rescheduler

logger = logging.getLogger(__name__)

DEFAULT_FUNCTION_NAME = "pythOracleUpdater"


class LambdaRescheduler(Rescheduler):
    """Rescheduler that asynchronously invokes a Lambda function.

    :ivar function_name: Name or ARN of the function to invoke.
    :ivar client: boto3 Lambda client.
    """

    def __init__(self, function_name: str | None = None, client: Any = None) -> None:
        """Initialize the rescheduler.

        :param function_name: Function to invoke (default: ``AWS_LAMBDA_FUNCTION_NAME``,
            then "pythOracleUpdater").
        :param client: Optional boto3 Lambda client.
        """
        self.function_name = (
            function_name
            or os.environ.get("AWS_LAMBDA_FUNCTION_NAME")
            or DEFAULT_FUNCTION_NAME
        )
        self.client = client or boto3.client("lambda")

    def reschedule(self, after: float) -> None:
        """Invoke the function asynchronously with the delay in the payload.

        :param after: Seconds the next invocation should wait.
        """
        payload = {"delaySeconds": after}
        self.client.invoke(
            FunctionName=self.function_name,
            InvocationType="Event",
            Payload=json.dumps(payload).encode("utf-8"),
        )
        logger.info(
            f"Scheduled next execution of {self.function_name} in {after:.1f} seconds"
        )
