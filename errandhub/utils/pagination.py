def paginate_query(query, offset, limit):
    """Return one offset/limit window of ``query`` and the size of the whole filtered set."""
    offset = max(int(offset) if offset else 0, 0)
    limit = max(int(limit) if limit is not None else 20, 0)
    items = query.offset(offset).limit(limit).all()
    total = query.order_by(None).count()
    return items, total
