# graphworks_sdk/graph/links.py
# SPDX-License-Identifier: Apache-2.0
"""
Context-menu links for graph nodes.

The links point back into this data source with a different query type
(events / mentions of the hovered node). They are project specific, but
they also make sure the node context menu is shown at all.

The query string is a template such as

    node(name: "${__data.fields.title}", type: "${__data.fields.subTitle}")

whose placeholders are resolved by the UI against the hovered row; it is
passed through verbatim here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from graphworks_sdk.graph.graph_base import DataSourceSettings, QueryType

LINK_DOMAIN = "GDELT"


@dataclass(frozen=True)
class Link:
    """
    Declarative, internal drill-down reference.

    Attributes:
        title: Menu entry label.
        query_type: Query type the link re-queries with.
        query: Placeholder-bearing query template.
        datasource_uid: Uid of the data source to query.
        datasource_name: Name of the data source to query.
    """
    title: str
    query_type: str
    query: str
    datasource_uid: str
    datasource_name: str

    @property
    def url(self) -> str:
        """Links are always internal."""
        return ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "internal": {
                "query": {
                    "queryType": self.query_type,
                    "query": self.query,
                },
                "datasourceUid": self.datasource_uid,
                "datasourceName": self.datasource_name,
            },
        }


def make_links(item_query: str, settings: DataSourceSettings) -> List[Link]:
    """Return the Events and Mentions links, in that order."""
    make_link = _link_factory(item_query, settings)
    return [
        make_link(f"{LINK_DOMAIN}/Events", QueryType.GET_EVENTS),
        make_link(f"{LINK_DOMAIN}/Mentions", QueryType.GET_MENTIONS),
    ]


def _link_factory(item_query: str, settings: DataSourceSettings) -> Callable[[str, QueryType], Link]:
    def make_link(title: str, query_type: QueryType) -> Link:
        return Link(
            title=title,
            query_type=query_type.value,
            query=item_query,
            datasource_uid=settings.uid,
            datasource_name=settings.name,
        )

    return make_link


__all__ = [
    "LINK_DOMAIN",
    "Link",
    "make_links",
]
