from __future__ import annotations

from synology_client import BadResponseError, NetworkError, RequestTimeoutError
from synology_client.classify import connection_failure_from


def test_bad_request_means_probable_wrong_protocol() -> None:
    error = BadResponseError(400, "bad request")
    failure = connection_failure_from(error)
    assert failure.type == "probable-wrong-protocol"
    assert failure.error is error


def test_other_bad_status_is_unknown() -> None:
    assert connection_failure_from(BadResponseError(502, "bad gateway")).type == "unknown"


def test_network_error_means_unreachable() -> None:
    assert connection_failure_from(NetworkError("refused")).type == "probable-wrong-url-or-unreachable"


def test_timeout() -> None:
    assert connection_failure_from(RequestTimeoutError("slow")).type == "timeout"


def test_unrecognized_error_is_preserved() -> None:
    error = ValueError("weird")
    failure = connection_failure_from(error)
    assert failure.type == "unknown"
    assert failure.error is error
