"""
Search Command Builder

Collects the pieces an application declares for a search (free text,
must/should/filter clauses, where and where-in conditions, pagination,
sorting, projection, aggregations) and turns them into a ``Query``.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from elasticsearch_explorer.aggregations import Aggregation
from elasticsearch_explorer.models import BoolQuery, Query
from elasticsearch_explorer.syntax import Clause, MultiMatch, Sort, Term, Terms

logger = logging.getLogger(__name__)


class SearchCommandSource(Protocol):
    """
    Anything the query compiler can compile.

    Implemented by ``SearchCommand`` and ``SearchCommandBuilder``.
    """

    def get_index(self) -> Optional[str]:
        """Return the target index, or None when not set."""
        ...

    def build_query(self) -> Query:
        """Return the query to run."""
        ...


class SearchCommandBuilder:
    """
    Mutable builder for search commands.

    Translation rules:
    - Free text becomes a fuzzy ``multi_match`` appended to ``must``,
      targeting the default search fields when any are set
    - Wheres become ``term`` filters, where-ins become ``terms`` filters,
      both appended after the explicit filter clauses
    """

    def __init__(self, index: Optional[str] = None):
        """
        Initialize search command builder.

        Args:
            index: Target index (can be set later with set_index)
        """
        self.index = index
        self.query: Optional[str] = None
        self.default_search_fields: List[str] = []
        self.must: List[Clause] = []
        self.should: List[Clause] = []
        self.filter: List[Clause] = []
        self.wheres: Dict[str, Any] = {}
        self.where_ins: Dict[str, List[Any]] = {}
        self.offset: Optional[int] = None
        self.limit: Optional[int] = None
        self.sort: List[Sort] = []
        self.fields: Optional[List[str]] = None
        self.aggregations: Dict[str, Aggregation] = {}

    def set_index(self, index: str) -> "SearchCommandBuilder":
        self.index = index
        return self

    def set_query(self, query: str) -> "SearchCommandBuilder":
        self.query = query
        return self

    def set_default_search_fields(self, fields: List[str]) -> "SearchCommandBuilder":
        self.default_search_fields = list(fields)
        return self

    def set_must(self, clauses: List[Clause]) -> "SearchCommandBuilder":
        self.must = list(clauses)
        return self

    def set_should(self, clauses: List[Clause]) -> "SearchCommandBuilder":
        self.should = list(clauses)
        return self

    def set_filter(self, clauses: List[Clause]) -> "SearchCommandBuilder":
        self.filter = list(clauses)
        return self

    def set_wheres(self, wheres: Dict[str, Any]) -> "SearchCommandBuilder":
        self.wheres = dict(wheres)
        return self

    def set_where_ins(self, where_ins: Dict[str, List[Any]]) -> "SearchCommandBuilder":
        self.where_ins = dict(where_ins)
        return self

    def set_offset(self, offset: Optional[int]) -> "SearchCommandBuilder":
        self.offset = offset
        return self

    def set_limit(self, limit: Optional[int]) -> "SearchCommandBuilder":
        self.limit = limit
        return self

    def set_sort(self, sort: List[Sort]) -> "SearchCommandBuilder":
        self.sort = list(sort)
        return self

    def set_fields(self, fields: Optional[List[str]]) -> "SearchCommandBuilder":
        self.fields = list(fields) if fields is not None else None
        return self

    def add_aggregation(self, name: str, aggregation: Aggregation) -> "SearchCommandBuilder":
        self.aggregations[name] = aggregation
        return self

    def get_index(self) -> Optional[str]:
        return self.index

    def build_query(self) -> Query:
        """
        Assemble the query from everything declared so far.

        Returns:
            Query with the boolean query, pagination, sort, fields and
            aggregations filled in
        """
        bool_query = BoolQuery(
            must=list(self.must),
            should=list(self.should),
            filter=list(self.filter),
        )

        if self.query:
            bool_query.must.append(MultiMatch(self.query, fields=self.default_search_fields or None))

        for field, value in self.wheres.items():
            bool_query.filter.append(Term(field, value))

        for field, values in self.where_ins.items():
            bool_query.filter.append(Terms(field, values))

        logger.debug(
            f"Built query for index '{self.index}': must={len(bool_query.must)}, "
            f"should={len(bool_query.should)}, filter={len(bool_query.filter)}"
        )

        return Query(
            bool_query=bool_query,
            offset=self.offset,
            limit=self.limit,
            sort=list(self.sort),
            fields=self.fields,
            aggregations=dict(self.aggregations),
        )
