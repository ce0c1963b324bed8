"""Concrete pipeline collaborators.

- `git.py`: GitFetcher, shallow clone / pull of the document repository
- `renderer.py`: MarkdownRenderer, document bytes to HTML
"""
