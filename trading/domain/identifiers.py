import uuid


def generate_id():
    """
    Returns a fresh 128-bit random identifier for participants and transactions.

    No uniqueness check is made against the database: uuid4 collisions are
    treated as impossible.
    """
    return uuid.uuid4()
