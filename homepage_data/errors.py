from __future__ import annotations


class HomepageDataError(Exception):
    pass


class ContainerNotFoundError(HomepageDataError):
    """The page has no element matching a container selector."""

    def __init__(self, selector: str):
        super().__init__(f"Could not find container {selector!r} in page")
        self.selector = selector
