"""Filesystem crawling."""
