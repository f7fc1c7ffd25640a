"""Unit tests for LambdaRescheduler."""

import json
from unittest.mock import MagicMock

from pyth_relayer.src.LambdaRescheduler import DEFAULT_FUNCTION_NAME, LambdaRescheduler


class TestLambdaRescheduler:
    """Test self-invocation requests."""

    def test_invokes_asynchronously_with_delay(self) -> None:
        """The next invocation should be an Event invoke carrying the delay."""
        client = MagicMock()
        rescheduler = LambdaRescheduler("pythOracleUpdater-prod", client=client)

        rescheduler.reschedule(40.0)

        client.invoke.assert_called_once()
        kwargs = client.invoke.call_args.kwargs
        assert kwargs["FunctionName"] == "pythOracleUpdater-prod"
        assert kwargs["InvocationType"] == "Event"
        assert json.loads(kwargs["Payload"]) == {"delaySeconds": 40.0}

    def test_function_name_from_env(self, monkeypatch) -> None:
        """AWS_LAMBDA_FUNCTION_NAME should be used when no name is given."""
        monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "relayer-staging")
        rescheduler = LambdaRescheduler(client=MagicMock())
        assert rescheduler.function_name == "relayer-staging"

    def test_default_function_name(self, monkeypatch) -> None:
        """Without any name the default function should be targeted."""
        monkeypatch.delenv("AWS_LAMBDA_FUNCTION_NAME", raising=False)
        rescheduler = LambdaRescheduler(client=MagicMock())
        assert rescheduler.function_name == DEFAULT_FUNCTION_NAME
