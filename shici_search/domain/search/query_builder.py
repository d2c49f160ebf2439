"""
Query construction for short, multi-token, CJK-aware searches.

Whitespace tokenization is unreliable for Chinese text, so the shape
of each sub-query depends on the token length:

    1 char      term query on the catch-all field, low boost
    2-3 chars   phrase query with slop 1
    > 3 chars   phrase on the first 7 chars OR a 75% multi_match

Several tokens are combined as a bool/should group of at most three
sub-queries. Nothing here talks to the engine.
"""

from typing import Any, Dict, List, Sequence

Query = Dict[str, Any]


class QueryBuilder:
    """Builds engine query documents from query tokens."""

    CATCH_ALL_FIELD = "_all"
    TERM_BOOST = 0.12
    PHRASE_SLOP = 1
    MAX_PHRASE_LENGTH = 7
    MINIMUM_SHOULD_MATCH = "75%"
    MAX_TOKENS = 3

    def build_search_request(self, tokens: Sequence[str], max_results: int) -> Query:
        """
        Build a complete search body with pagination.

        Args:
            tokens: Query tokens, already segmented
            max_results: Value for "size"

        Returns:
            Query: {"query": ..., "from": 0, "size": max_results}
        """
        query = self.build_query(tokens)
        query["from"] = 0
        query["size"] = max_results
        return query

    def build_query(self, tokens: Sequence[str]) -> Query:
        """
        Build {"query": ...} for one or more tokens.

        Raises:
            ValueError: If tokens is empty
        """
        if not tokens:
            raise ValueError("At least one query token is required")
        if len(tokens) == 1:
            return self.build_single_query(tokens[0])
        return self.build_bool_should_query(tokens)

    # build: { "query": { "bool": { "should": [ ... ] } } }
    def build_bool_should_query(self, tokens: Sequence[str]) -> Query:
        shoulds = [self.build_sub_query(t) for t in list(tokens)[:self.MAX_TOKENS]]
        return {"query": {"bool": {"should": shoulds}}}

    # build: { "query": {...} }
    def build_single_query(self, token: str) -> Query:
        return {"query": self.build_sub_query(token)}

    def build_sub_query(self, token: str) -> Query:
        if len(token) == 1:
            return self.build_term_query(token)
        if len(token) <= 3:
            return self.build_phrase_query(token)
        return self.build_fuzzy_phrase_query(token)

    # build: { "term": { "_all": { "value": "x", "boost": 0.12 } } }
    def build_term_query(self, term: str) -> Query:
        return {
            "term": {
                self.CATCH_ALL_FIELD: {"value": term, "boost": self.TERM_BOOST}
            }
        }

    # build: { "match_phrase": { "_all": { "query": "xxx", "slop": 1 } } }
    def build_phrase_query(self, token: str) -> Query:
        return {
            "match_phrase": {
                self.CATCH_ALL_FIELD: {"query": token, "slop": self.PHRASE_SLOP}
            }
        }

    def build_fuzzy_phrase_query(self, token: str) -> Query:
        """
        Combine a phrase query and a lenient multi_match.

        "bool": { "should": [
            { "match_phrase": { "_all": { "query": "日照香炉生紫烟", "slop": 1 } } },
            { "multi_match": { "fields": ["_all"], "query": "日照香炉生紫烟",
                               "minimum_should_match": "75%", "fuzziness": 0 } } ] }
        """
        token = token[:self.MAX_PHRASE_LENGTH]
        shoulds: List[Query] = [
            self.build_phrase_query(token),
            {
                "multi_match": {
                    "fields": [self.CATCH_ALL_FIELD],
                    "query": token,
                    "minimum_should_match": self.MINIMUM_SHOULD_MATCH,
                    "fuzziness": 0
                }
            }
        ]
        return {"bool": {"should": shoulds}}
