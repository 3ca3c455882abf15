"""
Unit tests for the lifecycle hooks.
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest

import main

pytestmark = pytest.mark.asyncio


async def test_lifespan_initializes_and_closes_database():
    root = logging.getLogger()
    previous = list(root.handlers), root.level
    try:
        with (
            patch("main.init_db", new=AsyncMock()) as init_db,
            patch("main.close_db", new=AsyncMock()) as close_db,
        ):
            async with main.lifespan():
                init_db.assert_awaited_once()
                close_db.assert_not_awaited()
            close_db.assert_awaited_once()
    finally:
        root.handlers[:] = previous[0]
        root.setLevel(previous[1])
