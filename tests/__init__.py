# SPDX-License-Identifier: Apache-2.0
"""
GraphWorks SDK Tests

Transformation, link, wire-mapping, transport, data source and CLI tests
for the GraphWorks data source.
"""
