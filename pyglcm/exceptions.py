# -*- coding: utf-8 -*-
"""
pyglcm exceptions
"""


class InvalidArgumentError(ValueError):
    """
    Raised when a grid, grey-level count, distance or direction violates the counting contract.
    Always raised before any co-occurrence is accumulated.
    """

    def __init__(self, message):
        super().__init__(message)


class GridLoadError(InvalidArgumentError):
    """
    Raised when a grid file has an unsupported extension or cannot be read as a 2D array
    """

    def __init__(self, message):
        super().__init__(message)
