"""
Search façade over the restaurant hashes.

The index is declared once during environment setup (see ``bites.bootstrap``)
and the engine keeps it in step with the hashes it watches. No request path
rebuilds it.
"""

import logging
import re

from redis.asyncio import Redis
from redis.commands.search.field import NumericField, TextField
from redis.commands.search.index_definition import IndexDefinition, IndexType
from redis.commands.search.query import Query
from redis.exceptions import ResponseError

from bites.keys import index_key, restaurant_key_prefix
from bites.models.restaurant import SearchHit

logger = logging.getLogger(__name__)

# Anything that is not a word character is query syntax or a token separator
_SPECIAL_RE = re.compile(r"([^\w])", re.UNICODE)


def index_definition() -> tuple[list, IndexDefinition]:
    """Searchable fields and the key prefix the indexer watches."""
    fields = [
        TextField("name"),
        NumericField("averageRating", sortable=True),
    ]
    definition = IndexDefinition(
        prefix=[restaurant_key_prefix()], index_type=IndexType.HASH
    )
    return fields, definition


async def create_index(redis: Redis, drop_existing: bool = True) -> None:
    """(Re)build the text index. Part of one-time environment setup."""
    index = redis.ft(index_key())
    if drop_existing:
        try:
            await index.dropindex(delete_documents=False)
            logger.info("Index %s dropped", index_key())
        except ResponseError:
            logger.info("Index %s does not exist, creating a new one", index_key())

    fields, definition = index_definition()
    await index.create_index(fields, definition=definition)
    logger.info("Index %s created", index_key())


def build_prefix_query(text: str) -> str:
    """
    Turn free text into a prefix query over the name field.

    ``"pizza pal"`` becomes ``@name:(pizza* pal*)``.
    """
    terms = [_SPECIAL_RE.sub(r"\\\1", term) for term in text.split()]
    return "@name:(" + " ".join(f"{term}*" for term in terms) + ")"


async def search(redis: Redis, text: str, limit: int = 10) -> list[SearchHit]:
    """
    Prefix-match restaurant names.

    Args:
        redis: Store client
        text: Free text; every whitespace-separated term is a prefix
        limit: Maximum number of hits

    Returns:
        Matching restaurants in engine relevance order
    """
    if not text.strip() or limit <= 0:
        return []

    query = Query(build_prefix_query(text)).paging(0, limit)
    result = await redis.ft(index_key()).search(query)

    prefix = restaurant_key_prefix()
    hits: list[SearchHit] = []
    for doc in result.docs:
        restaurant_id = doc.id.removeprefix(prefix)
        hits.append(
            SearchHit(
                id=restaurant_id,
                name=getattr(doc, "name", ""),
                location=getattr(doc, "location", None),
                average_rating=float(getattr(doc, "averageRating", 0) or 0),
            )
        )
    return hits
