"""
File-backed data access.

Every call reads the whole file again; nothing is cached between requests.
"""
