"""
Pytest configuration and fixtures for elasticsearch_explorer tests.
"""

import pytest
import sys
import os
from unittest.mock import Mock

# Add the parent directory to the Python path so we can import the modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

TEST_INDEX = "test_index"

EMPTY_BOOL = {
    "bool": {
        "must": [],
        "should": [],
        "filter": [],
    }
}


def make_hit(doc_id: int = 1, score: float = 1.0) -> dict:
    """Raw hit as Elasticsearch returns it."""
    return {
        "_index": TEST_INDEX,
        "_type": "default",
        "_id": str(doc_id),
        "_score": score,
        "_source": {},
    }


def make_response(hits=None, total=None, aggregations=None) -> dict:
    """Raw search response."""
    hits = hits if hits is not None else [make_hit()]
    response = {
        "hits": {
            "total": {"value": total if total is not None else len(hits)},
            "hits": hits,
        }
    }
    if aggregations is not None:
        response["aggregations"] = aggregations
    return response


@pytest.fixture
def mock_elasticsearch_client():
    """Mock Elasticsearch client for testing."""
    mock_client = Mock()
    mock_client.search.return_value = make_response()
    return mock_client


@pytest.fixture
def mock_index_adapter():
    """Mock index adapter for testing."""
    return Mock()
