from __future__ import annotations

from .client import AggregateClient  # noqa: F401
from .http_client import CancelToken, RequestCancelled  # noqa: F401
from .types import (  # noqa: F401
    AggregatePage,
    ApiError,
    BadwordsError,
    CountResult,
    Failure,
    FailureReason,
    SubmissionRequest,
    SubmitSuccess,
)
