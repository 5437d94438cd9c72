"""
GraphQL components: catalog query client and query definitions.
"""

from .graphql_client_comp import FindResult, GraphQLClient, GraphQLEnvelope
from .media_queries import MARK_COUNT_FILTER, MEDIA_QUERIES, MediaQuery

__all__ = [
    "MARK_COUNT_FILTER",
    "MEDIA_QUERIES",
    "FindResult",
    "GraphQLClient",
    "GraphQLEnvelope",
    "MediaQuery",
]
