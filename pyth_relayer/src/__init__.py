"""
Pyth Price Relayer - Update Submission Module

This module relays signed Pyth price updates to an on-chain oracle:
- RelayerConfig: Environment-derived configuration
- HermesClient: Fetches signed update data from Hermes
- OracleContract: Fee quotes, update transactions and price reads
- PriceUpdater: One fetch, fee and submit cycle
- PriceReader: Read-only price queries
- UpdateScheduler: Interval loop with error backoff
- Rescheduler / LambdaRescheduler: Host-driven self-invocation
"""

from .errors import (
    ConfigError,
    FeeQueryError,
    FetchError,
    FetchHTTPError,
    QueryError,
    RelayerError,
    SubmissionError,
)
from .HermesClient import HermesClient
from .LambdaRescheduler import LambdaRescheduler
from .OperationResult import PriceResult, UpdateResult
from .OracleContract import OracleContract, SubmittedUpdate
from .PriceReader import PriceReader
from .PriceUpdater import PriceUpdater
from .RelayerConfig import RelayerConfig
from .Rescheduler import Rescheduler
from .UpdateScheduler import SchedulerState, UpdateScheduler, compute_next_delay

__all__ = [
    "ConfigError",
    "FeeQueryError",
    "FetchError",
    "FetchHTTPError",
    "HermesClient",
    "LambdaRescheduler",
    "OracleContract",
    "PriceReader",
    "PriceResult",
    "PriceUpdater",
    "QueryError",
    "RelayerConfig",
    "RelayerError",
    "Rescheduler",
    "SchedulerState",
    "SubmissionError",
    "SubmittedUpdate",
    "UpdateResult",
    "UpdateScheduler",
    "compute_next_delay",
]
