"""Exceptions raised while building the search index."""


class IndexBuildError(RuntimeError):
    """A precondition of the index build failed; nothing has been written."""

    pass
