"""Shared helpers for Pickle Track: logging, id generation and clocks."""

# Pickle Track
# Copyright (C) 2025  Pickle Track developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import uuid
from datetime import datetime, timezone

from pickletrack.constants import LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_root_configured = False


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``pickletrack`` hierarchy.

    The first call installs a single stream handler on the package root
    logger. The level comes from ``PICKLETRACK_LOG_LEVEL`` (default WARNING).

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    global _root_configured
    if not _root_configured:
        root = logging.getLogger("pickletrack")
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))
        _root_configured = True
    return logging.getLogger(name)


def generate_id() -> str:
    """Generate a unique identifier for games, teams and fixtures."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Timezone-aware current time, used for all recorded timestamps."""
    return datetime.now(timezone.utc)


def isoformat_or_none(value):
    """Serialize an optional datetime."""
    return value.isoformat() if value is not None else None


__all__ = ["setup_logger", "generate_id", "utc_now", "isoformat_or_none"]
