from app.exceptions.custom import InvalidQueryError


def format_query(query: str) -> str:
    """Make a free-text search URL-query-safe for GSMArena's ``sSearch``.

    Only the first space becomes ``+``; any later spaces are left untouched.
    This matches the behaviour the service has always had and is most likely
    an unintended bug rather than a site requirement, so it is kept as-is.
    """
    if not isinstance(query, str):
        raise InvalidQueryError(f"Search query must be a string, got {type(query).__name__}")
    return query.replace(" ", "+", 1)
