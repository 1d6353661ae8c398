"""
Course table viewer: fetch, sort, group, filter and summarize a course list.
"""
