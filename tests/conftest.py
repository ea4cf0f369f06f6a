# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures for the GraphWorks SDK tests.

The data source is wired to `MockGraphWorksService` through httpx's
MockTransport, so the full request path (URL, headers, JSON body, status
mapping) is exercised without a network.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import pytest

from graphworks_sdk.graph.datasource import WorksDataSource
from graphworks_sdk.graph.graph_base import DataSourceSettings
from graphworks_sdk.graph.transport import HttpxTransport
from tests.mock.mock_graphworks_service import MockGraphWorksService

BASE_URL = "http://graphworks.test"


class RecordingMetrics:
    """MetricsSink that keeps every observation."""

    def __init__(self) -> None:
        self.observations: List[Dict[str, Any]] = []
        self.counters: List[Dict[str, Any]] = []

    def observe(self, **kw: Any) -> None:
        self.observations.append(kw)

    def counter(self, **kw: Any) -> None:
        self.counters.append(kw)


@pytest.fixture
def settings() -> DataSourceSettings:
    return DataSourceSettings(url=BASE_URL, uid="gw-uid", name="GraphWorks")


@pytest.fixture
def service() -> MockGraphWorksService:
    return MockGraphWorksService()


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def datasource(settings, service, metrics) -> WorksDataSource:
    transport = HttpxTransport(http_transport=service.transport())
    return WorksDataSource(settings, transport=transport, metrics=metrics)


@pytest.fixture
def make_datasource() -> Callable[..., Tuple[WorksDataSource, MockGraphWorksService]]:
    """Factory for data sources with custom routes and/or settings."""

    def _make(
        routes: Optional[Mapping[Tuple[str, str], Any]] = None,
        settings: Optional[DataSourceSettings] = None,
    ) -> Tuple[WorksDataSource, MockGraphWorksService]:
        svc = MockGraphWorksService(dict(routes or {}))
        ds = WorksDataSource(
            settings or DataSourceSettings(url=BASE_URL, uid="gw-uid", name="GraphWorks"),
            transport=HttpxTransport(http_transport=svc.transport()),
        )
        return ds, svc

    return _make
