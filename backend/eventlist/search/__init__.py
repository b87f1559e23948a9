"""
Event search pipeline: raw query string -> EventQuery -> predicates -> page.
"""
