class HashingError(Exception):
    """The password hashing primitive failed or was given a malformed hash"""
