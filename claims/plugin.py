"""
Claims plugin - the running claim system other plugins bind to.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Optional

from claims.datastore import DataStore
from host.plugin import Plugin


logger = logging.getLogger(__name__)


class ClaimsPlugin:
    """
    Holder of the live claim data store.

    ``ClaimsPlugin.instance`` is None until ``enable()`` has been called.
    """

    NAME = "Claims"

    instance: ClassVar[Optional[ClaimsPlugin]] = None

    def __init__(self, plugin: Plugin, data_store: Optional[DataStore] = None):
        self.plugin = plugin
        self.data_store = data_store or DataStore()

    @classmethod
    def enable(cls, plugin: Optional[Plugin] = None, data_store: Optional[DataStore] = None) -> ClaimsPlugin:
        cls.instance = cls(plugin or Plugin(cls.NAME), data_store)
        logger.info("Claims enabled")
        return cls.instance

    @classmethod
    def disable(cls) -> None:
        cls.instance = None
        logger.info("Claims disabled")
